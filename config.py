# config.py -- loaded by create_app() via app.config.from_object("config")
import os


def _float_or_none(raw):
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


SECRET_KEY = os.getenv("SECRET_KEY", "dev-change-me")

# Blog backend (the REST collection this admin manages)
BLOG_API_BASE_URL = os.getenv("BLOG_API_BASE_URL", "http://localhost:8000")
BLOG_API_RESOURCE = os.getenv("BLOG_API_RESOURCE", "blogs")
BLOG_API_TIMEOUT = _float_or_none(os.getenv("BLOG_API_TIMEOUT"))  # seconds; unset = no deadline
BLOG_API_LOG_BODY_CHARS = int(os.getenv("BLOG_API_LOG_BODY_CHARS", "800"))

APP_VERSION = os.getenv("APP_VERSION", "dev")

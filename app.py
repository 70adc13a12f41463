# app.py
import os
import logging
from logging.handlers import RotatingFileHandler

from flask import Flask, jsonify, redirect, url_for


def _attach_file_handler(target: logging.Logger, file_path: str) -> None:
    """
    Keep exactly one RotatingFileHandler on `target`. Both loggers outlive a
    single app, so a handler for a different path is closed and replaced.
    """
    for h in list(target.handlers):
        if not isinstance(h, RotatingFileHandler):
            continue
        if getattr(h, "baseFilename", "") == os.path.abspath(file_path):
            return
        target.removeHandler(h)
        h.close()

    file_handler = RotatingFileHandler(file_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s: %(message)s"
    ))
    target.addHandler(file_handler)


def _configure_logging(app: Flask) -> None:
    """
    Make INFO logs visible and also write to logs/blogadmin.log with rotation.
    The services/ loggers do not propagate to app.logger, so they get the
    same file.
    """
    app.logger.setLevel(logging.INFO)
    for h in app.logger.handlers:
        h.setLevel(logging.INFO)

    log_dir = app.config.get("LOG_DIR") or os.path.join(
        os.path.dirname(os.path.abspath(__file__)), "logs"
    )
    os.makedirs(log_dir, exist_ok=True)
    file_path = os.path.join(log_dir, "blogadmin.log")

    for target in (app.logger, logging.getLogger("services")):
        _attach_file_handler(target, file_path)
    logging.getLogger("services").setLevel(logging.INFO)

    app.logger.info("Logging configured. Writing to %s", file_path)


def create_app(overrides=None):
    app = Flask(
        __name__,
        static_folder="static",
        template_folder=os.path.join(
            os.path.dirname(os.path.abspath(__file__)), "templates"
        ),
    )

    app.config.from_object("config")
    if overrides:
        app.config.update(overrides)

    _configure_logging(app)

    # ----- Blueprints -----
    from blogs import bp as blogs_bp

    app.register_blueprint(blogs_bp)

    # ----- Routes -----
    @app.route("/")
    def index():
        return redirect(url_for("blogs.index"))

    @app.route("/health")
    def health():
        return jsonify({"ok": True, "version": app.config.get("APP_VERSION", "dev")})

    return app


if __name__ == "__main__":
    app = create_app()
    # Use Flask's reloader for local dev
    app.run(debug=True)

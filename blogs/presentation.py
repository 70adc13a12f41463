# blogs/presentation.py
from __future__ import annotations

from typing import Optional

from markupsafe import Markup

from . import bp

PREVIEW_CHARS = 100

# type label -> badge color
TYPE_COLORS = {
    "tech": "primary",
    "lifestyle": "secondary",
    "travel": "success",
    "food": "warning",
    "fashion": "error",
    "health": "info",
}
DEFAULT_TYPE_COLOR = "default"


def type_color(type_: Optional[str]) -> str:
    """Badge color for a blog type; case-insensitive, unknown types get the default."""
    if not type_:
        return DEFAULT_TYPE_COLOR
    return TYPE_COLORS.get(type_.lower(), DEFAULT_TYPE_COLOR)


def strip_html(html: Optional[str]) -> str:
    """Plain text of rich content (tags removed, entities decoded)."""
    if not html:
        return ""
    return Markup(html).striptags()


def preview(html: Optional[str], limit: int = PREVIEW_CHARS) -> str:
    return strip_html(html)[:limit] + "..."


@bp.app_template_filter("type_color")
def _type_color_filter(type_):
    return type_color(type_)


@bp.app_template_filter("plain_text")
def _plain_text_filter(html):
    return strip_html(html)


@bp.app_template_filter("preview")
def _preview_filter(html, limit: int = PREVIEW_CHARS):
    return preview(html, limit)

"""
Blogs blueprint: the admin screens over the remote blog collection.

Route definitions live in blogs/routes.py; template filters for the table
and dialogs live in blogs/presentation.py.
"""

from __future__ import annotations
from flask import Blueprint

bp = Blueprint("blogs", __name__, url_prefix="/blogs")

# Importing here keeps routes and filters colocated with the blueprint.
from . import presentation, routes  # noqa: E402,F401

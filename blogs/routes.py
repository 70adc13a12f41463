"""
Blog admin routes (HTML UI)

Every request mounts a fresh BlogAdmin over the backend gateway and
unmounts it when the response is built:
    GET  /blogs                    list
    GET  /blogs/new                compose dialog (create)
    POST /blogs/new                submit create
    GET  /blogs/<id>/edit          compose dialog (edit)
    POST /blogs/<id>/edit          submit update
    GET  /blogs/<id>               read-only view dialog
    GET  /blogs/<id>/delete        confirmation dialog
    POST /blogs/<id>/delete        delete (only with confirm=yes)

Notifications raised by the container become flash messages.
"""

from __future__ import annotations

from flask import current_app, flash, redirect, render_template, request, url_for

from models import FormState
from services.admin_state import CONFIRM_DELETE_PROMPT, BlogAdmin, Notice
from services.blog_client import BlogClient
from . import bp

# container severity -> flash category used by the templates
FLASH_CATEGORIES = {
    "success": "success",
    "error": "danger",
    "warning": "warning",
    "info": "info",
}


# --------------------------------------------------------------------
# Helpers
# --------------------------------------------------------------------

def _gateway():
    factory = current_app.config.get("BLOG_CLIENT_FACTORY")
    if factory is not None:
        return factory()
    return BlogClient.from_config(current_app.config)


def _flash_notice(notice: Notice) -> None:
    flash(notice.message, FLASH_CATEGORIES.get(notice.severity, "info"))


def _admin() -> BlogAdmin:
    return BlogAdmin(_gateway(), notify=_flash_notice)


def _render(admin: BlogAdmin, status: int = 200, **extra):
    return render_template("blogs/index.html", admin=admin, **extra), status


def _not_found():
    flash("Blog not found.", "warning")
    return redirect(url_for("blogs.index"))


# --------------------------------------------------------------------
# List
# --------------------------------------------------------------------

@bp.route("", methods=["GET"])
def index():
    with _admin() as admin:
        admin.mount()
        return _render(admin)


# --------------------------------------------------------------------
# Compose dialog: create / edit
# --------------------------------------------------------------------

def _submit(admin: BlogAdmin, editing_id=None):
    form = FormState.from_form(request.form, request.files)
    if admin.submit(form, editing_id):
        return redirect(url_for("blogs.index"))
    # keep the dialog open over a current table
    admin.fetch_list()
    return _render(admin, 400)


@bp.route("/new", methods=["GET", "POST"])
def create():
    with _admin() as admin:
        if request.method == "POST":
            return _submit(admin)

        admin.mount()
        admin.open_compose()
        return _render(admin)


@bp.route("/<blog_id>/edit", methods=["GET", "POST"])
def edit(blog_id: str):
    with _admin() as admin:
        if request.method == "POST":
            return _submit(admin, blog_id)

        admin.mount()
        record = admin.find(blog_id)
        if record is None:
            return _not_found()
        admin.open_compose(record)
        return _render(admin)


# --------------------------------------------------------------------
# View dialog
# --------------------------------------------------------------------

@bp.route("/<blog_id>", methods=["GET"])
def view(blog_id: str):
    with _admin() as admin:
        admin.mount()
        record = admin.find(blog_id)
        if record is None:
            return _not_found()
        admin.open_view(record)
        return _render(admin)


# --------------------------------------------------------------------
# Delete (confirmation required)
# --------------------------------------------------------------------

@bp.route("/<blog_id>/delete", methods=["GET", "POST"])
def delete(blog_id: str):
    with _admin() as admin:
        if request.method == "POST":
            confirmed = request.form.get("confirm") == "yes"
            admin.remove(blog_id, confirm=lambda _prompt: confirmed)
            return redirect(url_for("blogs.index"))

        admin.mount()
        record = admin.find(blog_id)
        if record is None:
            return _not_found()
        return _render(admin, confirm_delete=record, confirm_prompt=CONFIRM_DELETE_PROMPT)

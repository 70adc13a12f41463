# manage_blogs.py -- terminal front-end for the same admin operations as /blogs
import argparse
import sys

from app import create_app
from models import FormState
from services.admin_state import BlogAdmin, Notice
from services.blog_client import BlogClient
from blogs.presentation import preview


def _print_notice(notice: Notice) -> None:
    stream = sys.stderr if notice.severity == "error" else sys.stdout
    print(f"[{notice.severity}] {notice.message}", file=stream)


def _ask(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ").strip().lower()
    return answer in ("y", "yes")


def _print_list(admin: BlogAdmin) -> None:
    if not admin.records:
        print("No blogs available yet.")
        return
    for blog in admin.records:
        print(f"{blog.id}\t{blog.type or '-'}\t{blog.title}\t{preview(blog.content, 60)}")


def _cmd_list(admin: BlogAdmin, args) -> bool:
    admin.mount()
    _print_list(admin)
    return admin.list_state.kind == "loaded"


def _cmd_create(admin: BlogAdmin, args) -> bool:
    form = FormState(
        title=args.title,
        content=args.content or "",
        image=args.image or None,
        type=args.type or "",
    )
    return admin.submit(form)


def _cmd_update(admin: BlogAdmin, args) -> bool:
    admin.mount()
    record = admin.find(args.id)
    if record is None:
        print(f"Blog {args.id} not found.", file=sys.stderr)
        return False
    admin.open_compose(record)
    for name in ("title", "content", "image", "type"):
        value = getattr(args, name)
        if value is not None:
            if name == "image":
                value = value or None
            admin.set_field(name, value)
    return admin.submit()


def _cmd_delete(admin: BlogAdmin, args) -> bool:
    declined = []

    def confirm(prompt: str) -> bool:
        ok = args.yes or _ask(prompt)
        if not ok:
            declined.append(args.id)
        return ok

    if admin.remove(args.id, confirm=confirm):
        return True
    if declined:
        print("Cancelled.")
        return True
    return False


def main(argv=None):
    parser = argparse.ArgumentParser(description="Manage blogs on the configured blog backend.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all blogs.")

    p_create = sub.add_parser("create", help="Create a blog.")
    p_create.add_argument("--title", required=True)
    p_create.add_argument("--content", default="")
    p_create.add_argument("--image", default=None, help="Image URL.")
    p_create.add_argument("--type", default="", help="Category, e.g. tech, travel.")

    p_update = sub.add_parser("update", help="Update fields of an existing blog.")
    p_update.add_argument("id")
    p_update.add_argument("--title", default=None)
    p_update.add_argument("--content", default=None)
    p_update.add_argument("--image", default=None, help="Image URL ('' clears it).")
    p_update.add_argument("--type", default=None)

    p_delete = sub.add_parser("delete", help="Delete a blog (asks for confirmation).")
    p_delete.add_argument("id")
    p_delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt.")

    args = parser.parse_args(argv)

    app = create_app()
    commands = {
        "list": _cmd_list,
        "create": _cmd_create,
        "update": _cmd_update,
        "delete": _cmd_delete,
    }
    with BlogAdmin(BlogClient.from_config(app.config), notify=_print_notice) as admin:
        ok = commands[args.command](admin, args)
    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()

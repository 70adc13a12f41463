# conftest.py -- shared fixtures: a recording in-memory gateway and the Flask app wired to it
from __future__ import annotations

import pytest

from app import create_app
from models import BlogRecord


class FakeGateway:
    """Stands in for BlogClient; keeps the collection in memory and records every call."""

    def __init__(self, records=()):
        self.records = list(records)
        self.calls = []
        self.failures = {}     # op name -> exception to raise
        self.close_count = 0
        self._next_id = 100

    def _call(self, op, *args):
        self.calls.append((op, *args))
        exc = self.failures.get(op)
        if exc is not None:
            raise exc

    def count(self, op):
        return sum(1 for c in self.calls if c[0] == op)

    def list_blogs(self):
        self._call("list")
        return list(self.records)

    def create_blog(self, form):
        self._call("create", form)
        self._next_id += 1
        record = BlogRecord(
            id=str(self._next_id),
            title=form.title,
            content=form.content,
            image=form.image if isinstance(form.image, str) else None,
            type=form.type,
        )
        self.records.append(record)
        return record

    def update_blog(self, blog_id, form):
        self._call("update", blog_id, form)
        updated = BlogRecord(
            id=blog_id,
            title=form.title,
            content=form.content,
            image=form.image if isinstance(form.image, str) else None,
            type=form.type,
        )
        self.records = [updated if r.id == blog_id else r for r in self.records]
        return updated

    def delete_blog(self, blog_id):
        self._call("delete", blog_id)
        self.records = [r for r in self.records if r.id != blog_id]

    def close(self):
        self.close_count += 1


@pytest.fixture
def hello_record():
    return BlogRecord(id="1", title="Hello", content="<p>Hi <b>there</b></p>", type="tech")


@pytest.fixture
def gateway(hello_record):
    return FakeGateway([hello_record])


@pytest.fixture
def app(gateway, tmp_path):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "LOG_DIR": str(tmp_path / "logs"),
        "BLOG_CLIENT_FACTORY": lambda: gateway,
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()

# services/admin_state.py
"""
State container behind the blog admin screens.

One BlogAdmin lives for one mount: a single HTTP request in the web UI, or
a single run of manage_blogs.py. It owns:
  - the list state (idle / loading / loaded / error)
  - the compose dialog (closed, or open in create or edit mode with a form)
  - the record shown in the read-only view dialog
  - notifications waiting to be shown

Mutations go through the gateway and are always followed by a full re-fetch;
the list is never patched locally.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, List, Optional, Tuple, Union

from models import BlogRecord, FormState
from services.blog_client import describe_error

log = logging.getLogger(__name__)

CONFIRM_DELETE_PROMPT = "Are you sure?"
MSG_TITLE_REQUIRED = "Title is required"
MSG_CREATED = "Blog created"
MSG_UPDATED = "Blog updated"
MSG_DELETED = "Blog deleted"
MSG_LOAD_FAILED = "Failed to load blogs"
MSG_SAVE_FAILED = "Error saving blog"
MSG_DELETE_FAILED = "Failed to delete blog"


# ---------------------------- Data types ------------------------------------

@dataclass(frozen=True)
class Notice:
    message: str
    severity: str = "success"   # success | error | warning | info


@dataclass(frozen=True)
class ListIdle:
    kind: ClassVar[str] = "idle"
    records: Tuple[BlogRecord, ...] = ()


@dataclass(frozen=True)
class ListLoading:
    kind: ClassVar[str] = "loading"
    records: Tuple[BlogRecord, ...] = ()   # still shown while the fetch runs


@dataclass(frozen=True)
class ListLoaded:
    kind: ClassVar[str] = "loaded"
    records: Tuple[BlogRecord, ...] = ()


@dataclass(frozen=True)
class ListError:
    kind: ClassVar[str] = "error"
    message: str
    records: Tuple[BlogRecord, ...] = ()   # last good list, untouched by the failure


ListState = Union[ListIdle, ListLoading, ListLoaded, ListError]


@dataclass(frozen=True)
class ComposeClosed:
    pass


@dataclass(frozen=True)
class ComposeOpen:
    form: FormState = field(default_factory=FormState.blank)
    editing_id: Optional[str] = None

    @property
    def mode(self) -> str:
        return "edit" if self.editing_id is not None else "create"


ComposeState = Union[ComposeClosed, ComposeOpen]


class CancelToken:
    """Set once the owning container unmounts; late results are dropped."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


# ---------------------------- Container -------------------------------------

class BlogAdmin:
    def __init__(self, gateway: Any, notify: Optional[Callable[[Notice], None]] = None):
        self.gateway = gateway
        self._notify_cb = notify
        self.token = CancelToken()
        self.list_state: ListState = ListIdle()
        self.compose: ComposeState = ComposeClosed()
        self.viewing: Optional[BlogRecord] = None
        self.notices: List[Notice] = []

    # ----- lifetime -----

    def mount(self) -> "BlogAdmin":
        self.fetch_list()
        return self

    def unmount(self) -> None:
        if self.token.cancelled:
            return
        self.token.cancel()
        self.gateway.close()

    def __enter__(self) -> "BlogAdmin":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    # ----- derived views -----

    @property
    def records(self) -> Tuple[BlogRecord, ...]:
        return self.list_state.records

    @property
    def loading(self) -> bool:
        return isinstance(self.list_state, ListLoading)

    @property
    def form(self) -> FormState:
        if isinstance(self.compose, ComposeOpen):
            return self.compose.form
        return FormState.blank()

    @property
    def compose_open(self) -> bool:
        return isinstance(self.compose, ComposeOpen)

    def find(self, blog_id: str) -> Optional[BlogRecord]:
        for record in self.records:
            if record.id == blog_id:
                return record
        return None

    # ----- notifications -----

    def _notify(self, message: str, severity: str = "success") -> None:
        notice = Notice(message, severity)
        self.notices.append(notice)
        if self._notify_cb is not None:
            self._notify_cb(notice)

    def drain_notices(self) -> List[Notice]:
        out, self.notices = self.notices, []
        return out

    # ----- list -----

    def fetch_list(self) -> None:
        if self.token.cancelled:
            return
        previous = self.records
        self.list_state = ListLoading(previous)
        try:
            records = self.gateway.list_blogs()
        except Exception as e:
            if self.token.cancelled:
                return
            log.warning("Loading blogs failed: %s", e)
            self.list_state = ListError(describe_error(e, MSG_LOAD_FAILED), previous)
            self._notify(MSG_LOAD_FAILED, "error")
            return
        if self.token.cancelled:
            return
        self.list_state = ListLoaded(tuple(records))

    # ----- compose dialog -----

    def open_compose(self, existing: Optional[BlogRecord] = None) -> None:
        if existing is not None:
            self.compose = ComposeOpen(FormState.from_record(existing), existing.id)
        else:
            self.compose = ComposeOpen(FormState.blank(), None)

    def close_compose(self) -> None:
        self.compose = ComposeClosed()

    def set_field(self, name: str, value: Any) -> None:
        if not isinstance(self.compose, ComposeOpen):
            return
        self.compose = ComposeOpen(self.compose.form.with_field(name, value), self.compose.editing_id)

    def submit(self, form: Optional[FormState] = None, editing_id: Optional[str] = None) -> bool:
        """
        Create (no editing_id) or update a blog from `form`. Without arguments
        the open compose dialog's form and mode are used. Returns True on success.
        """
        if self.token.cancelled:
            return False
        if form is None:
            form = self.form
            if isinstance(self.compose, ComposeOpen):
                editing_id = self.compose.editing_id
        # the dialog holds whatever was submitted so a failure can be corrected
        self.compose = ComposeOpen(form, editing_id)

        if not form.has_title():
            self._notify(MSG_TITLE_REQUIRED, "error")
            return False

        try:
            if editing_id is not None:
                self.gateway.update_blog(editing_id, form)
                message = MSG_UPDATED
            else:
                self.gateway.create_blog(form)
                message = MSG_CREATED
        except Exception as e:
            log.exception("Save error")
            self._notify(describe_error(e, MSG_SAVE_FAILED), "error")
            return False

        if self.token.cancelled:
            return True
        self._notify(message)
        self.close_compose()
        self.fetch_list()
        return True

    # ----- delete -----

    def remove(self, blog_id: str, confirm: Callable[[str], bool]) -> bool:
        if self.token.cancelled:
            return False
        if not confirm(CONFIRM_DELETE_PROMPT):
            return False
        try:
            self.gateway.delete_blog(blog_id)
        except Exception as e:
            log.warning("Deleting blog %s failed: %s", blog_id, e)
            self._notify(MSG_DELETE_FAILED, "error")
            return False
        if self.token.cancelled:
            return True
        self._notify(MSG_DELETED)
        self.fetch_list()
        return True

    # ----- view dialog -----

    def open_view(self, record: BlogRecord) -> None:
        self.viewing = record

    def close_view(self) -> None:
        self.viewing = None

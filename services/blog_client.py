# services/blog_client.py
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import requests

from models import BlogRecord, FormState

log = logging.getLogger(__name__)

DEFAULT_RESOURCE = "blogs"
DEFAULT_LOG_BODY_CHARS = 800
DEFAULT_HEADERS = {
    "User-Agent": "BlogAdmin/0.1",
    "Accept": "application/json",
}


# ----------------------------- Errors ----------------------------------------

class GatewayError(Exception):
    """
    A failed call to the blog backend.

    server_message / server_error come from the JSON error body when the
    backend sent one; transport_message is what requests reported.
    """

    def __init__(
        self,
        transport_message: str = "",
        *,
        status: Optional[int] = None,
        server_message: Optional[str] = None,
        server_error: Optional[str] = None,
    ):
        super().__init__(server_message or server_error or transport_message or "blog backend request failed")
        self.status = status
        self.server_message = server_message
        self.server_error = server_error
        self.transport_message = transport_message

    @classmethod
    def from_response(cls, resp: requests.Response, exc: Exception) -> "GatewayError":
        body = _json_or_none(resp)
        message = error = None
        if isinstance(body, dict):
            message = _text_or_none(body.get("message"))
            error = _text_or_none(body.get("error"))
            if error is None:
                # FastAPI puts its error text under "detail"
                error = _text_or_none(body.get("detail"))
        return cls(str(exc), status=resp.status_code, server_message=message, server_error=error)


def describe_error(error: BaseException, fallback: str) -> str:
    """
    Pick the most specific message available for a failed call:
    server message, then server error field, then transport text, then fallback.
    """
    if isinstance(error, GatewayError):
        for candidate in (error.server_message, error.server_error, error.transport_message):
            if candidate:
                return candidate
        return fallback
    return str(error) or fallback


def _text_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _json_or_none(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None


# ----------------------------- Logging Helpers -------------------------------

def _log_http_safe(label: str, resp: requests.Response, elapsed_ms: int, body_chars: int) -> None:
    """Log URL, status, elapsed, and a truncated body."""
    txt = resp.text or ""
    body_snippet = txt[:body_chars] + (
        f"... [truncated {len(txt) - body_chars} chars]" if len(txt) > body_chars else ""
    )
    log.info(
        "[blogs] | %s",
        {
            "label": label,
            "status": resp.status_code,
            "elapsed_ms": elapsed_ms,
            "url": resp.url,
            "body_snippet": body_snippet,
        },
    )


# --------------------------------- Client ------------------------------------

class BlogClient:
    """
    Gateway to the backend's blog collection. One round trip per call,
    no retries; every failure surfaces as GatewayError.
    """

    def __init__(
        self,
        base_url: str,
        resource: str = DEFAULT_RESOURCE,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        log_body_chars: int = DEFAULT_LOG_BODY_CHARS,
    ):
        self.base = f"{base_url.rstrip('/')}/{resource.strip('/')}"
        self.timeout = timeout
        self.log_body_chars = log_body_chars
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "BlogClient":
        return cls(
            base_url=config["BLOG_API_BASE_URL"],
            resource=config.get("BLOG_API_RESOURCE", DEFAULT_RESOURCE),
            timeout=config.get("BLOG_API_TIMEOUT"),
            log_body_chars=int(config.get("BLOG_API_LOG_BODY_CHARS", DEFAULT_LOG_BODY_CHARS)),
        )

    # ---------------------------- Public API ---------------------------------

    def list_blogs(self) -> List[BlogRecord]:
        resp = self._request("GET", "")
        body = _json_or_none(resp)
        if isinstance(body, dict):
            body = body.get("items")
        if not isinstance(body, list):
            raise GatewayError(f"unexpected list payload from {resp.url}", status=resp.status_code)
        try:
            return [BlogRecord.from_api(item) for item in body]
        except (AttributeError, ValueError) as e:
            raise GatewayError(f"malformed blog in list payload: {e}", status=resp.status_code) from e

    def create_blog(self, form: FormState) -> Optional[BlogRecord]:
        """POST a new blog. Returns the created record when the backend echoes one."""
        resp = self._request("POST", "", **self._body(form))
        return self._maybe_record(resp)

    def update_blog(self, blog_id: str, form: FormState) -> Optional[BlogRecord]:
        resp = self._request("PUT", blog_id, **self._body(form))
        return self._maybe_record(resp)

    def delete_blog(self, blog_id: str) -> None:
        self._request("DELETE", blog_id)

    def close(self) -> None:
        self.session.close()

    # ---------------------------- Internals ----------------------------------

    def _url(self, blog_id: str) -> str:
        return f"{self.base}/{blog_id}" if blog_id else self.base

    def _request(self, method: str, blog_id: str, **kwargs: Any) -> requests.Response:
        url = self._url(blog_id)
        label = f"{method} {blog_id or '<collection>'}"
        start = time.time()
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            log.warning("[blogs] %s failed before a response: %s", label, e)
            raise GatewayError(str(e)) from e
        elapsed_ms = int((time.time() - start) * 1000)
        _log_http_safe(label, resp, elapsed_ms, self.log_body_chars)

        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise GatewayError.from_response(resp, e) from e
        return resp

    @staticmethod
    def _body(form: FormState) -> Dict[str, Any]:
        """JSON body, or multipart when the form carries an uploaded image."""
        payload = form.to_payload()
        if not form.has_upload():
            return {"json": payload}
        upload = form.image
        data = {k: v for k, v in payload.items() if k != "image" and v is not None}
        return {"data": data, "files": {"image": (upload.filename, upload.content, upload.mimetype)}}

    @staticmethod
    def _maybe_record(resp: requests.Response) -> Optional[BlogRecord]:
        body = _json_or_none(resp)
        if not isinstance(body, dict):
            return None
        try:
            return BlogRecord.from_api(body)
        except ValueError:
            # e.g. {"status": "updated"}: acknowledged without the record
            return None

# models.py
"""
Plain data types mirrored from the blog backend.

Nothing here is persisted: the backend owns every BlogRecord and the admin
only keeps a copy of its last fetched list.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional, Union

# ----- BlogRecord ------------------------------------------------------------


@dataclass(frozen=True)
class BlogRecord:
    id: str
    title: str
    content: str = ""
    image: Optional[str] = None   # URL as returned by the backend
    type: str = ""

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "BlogRecord":
        """
        Build a record from backend JSON. Mongo-style backends send `_id`,
        others `id`; either is accepted.
        """
        raw_id = payload.get("_id") or payload.get("id")
        if raw_id is None or str(raw_id) == "":
            raise ValueError(f"blog payload has no identifier: {dict(payload)!r}")
        return cls(
            id=str(raw_id),
            title=str(payload.get("title") or ""),
            content=str(payload.get("content") or ""),
            image=payload.get("image") or None,
            type=str(payload.get("type") or ""),
        )


# ----- FormState -------------------------------------------------------------


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    content: bytes
    mimetype: str = "application/octet-stream"


ImageRef = Union[str, ImageUpload, None]

FORM_FIELDS = ("title", "content", "image", "type")


@dataclass(frozen=True)
class FormState:
    title: str = ""
    content: str = ""
    image: ImageRef = None
    type: str = ""

    @classmethod
    def blank(cls) -> "FormState":
        return cls()

    @classmethod
    def from_record(cls, record: BlogRecord) -> "FormState":
        return cls(
            title=record.title,
            content=record.content,
            image=record.image or None,
            type=record.type,
        )

    @classmethod
    def from_form(cls, form: Mapping[str, str], files: Optional[Mapping[str, Any]] = None) -> "FormState":
        """
        Parse a submitted compose form. An uploaded file wins over the
        image URL text field; a blank URL means "no image".
        """
        image: ImageRef = (form.get("image") or "").strip() or None

        upload = (files or {}).get("image_file")
        if upload is not None and getattr(upload, "filename", ""):
            data = upload.read()
            if data:
                image = ImageUpload(
                    filename=upload.filename,
                    content=data,
                    mimetype=getattr(upload, "mimetype", None) or "application/octet-stream",
                )

        return cls(
            title=form.get("title") or "",
            content=form.get("content") or "",
            image=image,
            type=(form.get("type") or "").strip(),
        )

    def has_title(self) -> bool:
        return bool(self.title.strip())

    def with_field(self, name: str, value: Any) -> "FormState":
        if name not in FORM_FIELDS:
            raise KeyError(name)
        return replace(self, **{name: value})

    def has_upload(self) -> bool:
        return isinstance(self.image, ImageUpload)

    def to_payload(self) -> Dict[str, Any]:
        """Request body for create/update. Uploads travel separately as a file part."""
        return {
            "title": self.title,
            "content": self.content,
            "image": None if self.has_upload() else self.image,
            "type": self.type,
        }

import io

import pytest
from werkzeug.datastructures import FileStorage, MultiDict

from models import BlogRecord, FormState, ImageUpload


def test_from_api_reads_mongo_id():
    record = BlogRecord.from_api({"_id": "65f0", "title": "T", "content": "C", "image": "", "type": "tech"})
    assert record == BlogRecord(id="65f0", title="T", content="C", image=None, type="tech")


def test_from_api_reads_plain_id_and_defaults():
    record = BlogRecord.from_api({"id": 12, "title": "T"})
    assert (record.id, record.content, record.image, record.type) == ("12", "", None, "")


def test_from_api_requires_id():
    with pytest.raises(ValueError):
        BlogRecord.from_api({"title": "no id"})


def test_form_from_record_and_payload():
    record = BlogRecord(id="1", title="T", content="C", image="http://img/a.png", type="food")
    form = FormState.from_record(record)
    assert form.to_payload() == {"title": "T", "content": "C", "image": "http://img/a.png", "type": "food"}


def test_form_from_submitted_fields():
    form = FormState.from_form(MultiDict({"title": "T", "content": "C", "image": "  ", "type": " travel "}))
    assert form == FormState(title="T", content="C", image=None, type="travel")


def test_uploaded_file_wins_over_url():
    upload = FileStorage(stream=io.BytesIO(b"GIF89a"), filename="a.gif", content_type="image/gif")
    form = FormState.from_form(MultiDict({"title": "T", "image": "http://img/old.png"}), {"image_file": upload})

    assert form.image == ImageUpload(filename="a.gif", content=b"GIF89a", mimetype="image/gif")
    assert form.has_upload()
    assert form.to_payload()["image"] is None


def test_empty_file_field_is_ignored():
    upload = FileStorage(stream=io.BytesIO(b""), filename="")
    form = FormState.from_form(MultiDict({"title": "T", "image": "http://img/x.png"}), {"image_file": upload})
    assert form.image == "http://img/x.png"


def test_has_title_and_with_field():
    assert not FormState(title=" \n").has_title()
    form = FormState.blank().with_field("title", "Now")
    assert form.has_title()
    with pytest.raises(KeyError):
        form.with_field("author", "me")


def test_from_api_null_mongo_id_falls_back_to_id():
    record = BlogRecord.from_api({"_id": None, "id": "7", "title": "t"})
    assert record.id == "7"

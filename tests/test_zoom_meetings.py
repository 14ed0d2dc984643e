from __future__ import annotations

import pytest

from zoom_meetings import (
    SEPARATOR_MARKER, EntryKind, IdMeeting, InvalidEntry, Separator, UrlMeeting,
    classify, display_label, entry_from_dict, entry_to_dict, is_meeting_url,
    matches, raw_identifier,
)


def test_classify_each_shape() -> None:
    assert classify(UrlMeeting(url="https://zoom.us/j/1")) is EntryKind.URL
    assert classify(IdMeeting(id="1")) is EntryKind.ID
    assert classify(Separator()) is EntryKind.SEPARATOR


def test_classify_rejects_empty_identifier() -> None:
    with pytest.raises(InvalidEntry):
        classify(UrlMeeting(url=""))
    with pytest.raises(InvalidEntry):
        classify(IdMeeting(id=""))


def test_entry_from_dict_rejects_url_and_id_together() -> None:
    with pytest.raises(InvalidEntry):
        entry_from_dict({"title": "x", "url": "https://zoom.us/j/1", "id": "1"})


def test_entry_from_dict_rejects_non_objects() -> None:
    with pytest.raises(InvalidEntry):
        entry_from_dict(["not", "an", "object"])  # type: ignore[arg-type]


def test_entry_from_dict_shapes() -> None:
    assert entry_from_dict({"url": "https://zoom.us/j/1", "title": "A"}) == UrlMeeting(
        url="https://zoom.us/j/1", title="A"
    )
    assert entry_from_dict({"id": 12345, "password": ""}) == IdMeeting(id="12345")
    assert entry_from_dict({"title": "-"}) == Separator()
    assert entry_from_dict({"title": "-", "section": "Team"}) == Separator(section="Team")


def test_display_label_priority() -> None:
    assert display_label(UrlMeeting(url="https://zoom.us/j/1", title="Weekly")) == "Weekly"
    assert display_label(UrlMeeting(url="https://zoom.us/j/1")) == "https://zoom.us/j/1"
    assert display_label(IdMeeting(id="987")) == "987"
    assert display_label(Separator(section="Team")) == SEPARATOR_MARKER


def test_raw_identifier() -> None:
    assert raw_identifier(UrlMeeting(url="https://zoom.us/j/1")) == "https://zoom.us/j/1"
    assert raw_identifier(IdMeeting(id="5", password="pw")) == "5"
    assert raw_identifier(Separator()) is None


def test_matches_title_and_sub_text() -> None:
    entry = IdMeeting(id="222", title="Acme")
    assert matches(entry, "Acme", "222")
    assert not matches(entry, "Acme", "333")
    assert not matches(entry, "Other", "222")


def test_matches_row_without_sub_text() -> None:
    # Label equals the identifier, so the picker row carries no sub-text
    entry = UrlMeeting(url="https://zoom.us/j/1")
    assert matches(entry, "https://zoom.us/j/1", None)


def test_row_without_sub_text_skips_titled_entry_of_other_kind() -> None:
    titled_url = UrlMeeting(url="https://zoom.us/j/9", title="555")
    assert not matches(titled_url, "555", None)
    assert matches(IdMeeting(id="555"), "555", None)


def test_entry_to_dict_omits_absent_fields() -> None:
    assert entry_to_dict(UrlMeeting(url="https://zoom.us/j/1")) == {"url": "https://zoom.us/j/1"}
    assert entry_to_dict(IdMeeting(id="5", password="pw", title="T")) == {
        "title": "T", "id": "5", "password": "pw",
    }
    assert entry_to_dict(Separator()) == {"title": SEPARATOR_MARKER}
    assert entry_to_dict(Separator(section="S")) == {"title": SEPARATOR_MARKER, "section": "S"}


def test_password_not_in_repr() -> None:
    assert "secret" not in repr(IdMeeting(id="5", password="secret"))


def test_is_meeting_url() -> None:
    assert is_meeting_url("https://zoom.us/j/1")
    assert not is_meeting_url("123456789")

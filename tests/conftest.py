from __future__ import annotations

import os
from pathlib import Path

import pytest

# Qt widgets are only exercised headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from meeting_registry import MeetingRegistry  # noqa: E402
from meeting_store import JsonMeetingStore  # noqa: E402
from zoom_meetings import IdMeeting, Separator, UrlMeeting  # noqa: E402


class FakeLaunchSink:
    """Records every call instead of talking to macOS."""

    def __init__(self) -> None:
        self.opened: list[tuple[str, str]] = []
        self.focused: list[str] = []

    def launch_or_focus(self, app_name: str, bundle_id: str | None = None) -> None:
        self.focused.append(app_name)

    def open_url(self, url: str, bundle_id: str) -> None:
        self.opened.append((url, bundle_id))


@pytest.fixture
def meeting_file(tmp_path: Path) -> Path:
    return tmp_path / "zoomjoin.json"


@pytest.fixture
def store(meeting_file: Path) -> JsonMeetingStore:
    return JsonMeetingStore(meeting_file, backup_count=2)


@pytest.fixture
def registry(store: JsonMeetingStore) -> MeetingRegistry:
    return MeetingRegistry(store)


@pytest.fixture
def mixed_entries() -> list:
    return [
        UrlMeeting(url="https://zoom.us/j/111", title="Standup"),
        Separator(section="Clients"),
        IdMeeting(id="222", password="p", title="Acme"),
        IdMeeting(id="333"),
        Separator(),
        UrlMeeting(url="https://example.zoom.us/j/444"),
    ]


@pytest.fixture
def fake_sink() -> FakeLaunchSink:
    return FakeLaunchSink()

from __future__ import annotations

import subprocess

import pytest

import meeting_launcher
from meeting_launcher import (
    ZOOM_APP_NAME, ZOOM_BUNDLE_ID, MacLaunchSink, MeetingLauncher,
)
from zoom_meetings import (
    IdMeeting, LaunchError, NotLaunchable, PasswordJoinUnsupported, Separator, UrlMeeting,
)


def test_id_without_password_uses_join_url(fake_sink) -> None:
    launcher = MeetingLauncher(fake_sink)
    assert launcher.launch(IdMeeting(id="222")) == "https://zoom.us/j/222"
    assert fake_sink.opened == [("https://zoom.us/j/222", ZOOM_BUNDLE_ID)]
    assert fake_sink.focused == []


def test_url_is_opened_unchanged_after_focus(fake_sink) -> None:
    launcher = MeetingLauncher(fake_sink)
    assert launcher.launch(UrlMeeting(url="https://zoom.us/j/111")) == "https://zoom.us/j/111"
    assert fake_sink.focused == [ZOOM_APP_NAME]
    assert fake_sink.opened == [("https://zoom.us/j/111", ZOOM_BUNDLE_ID)]


def test_id_with_password_is_unsupported(fake_sink) -> None:
    with pytest.raises(PasswordJoinUnsupported):
        MeetingLauncher(fake_sink).launch(IdMeeting(id="222", password="p"))
    assert fake_sink.opened == []


def test_separator_is_not_launchable(fake_sink) -> None:
    with pytest.raises(NotLaunchable):
        MeetingLauncher(fake_sink).launch(Separator(section="x"))
    assert fake_sink.opened == []


def test_mac_sink_open_url_command(monkeypatch: pytest.MonkeyPatch) -> None:
    commands = []

    def fake_run(cmd, **kwargs):
        commands.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(meeting_launcher.subprocess, "run", fake_run)
    MacLaunchSink().open_url("https://zoom.us/j/1", ZOOM_BUNDLE_ID)
    assert commands == [["open", "-b", ZOOM_BUNDLE_ID, "https://zoom.us/j/1"]]


def test_mac_sink_launches_app_when_not_running(monkeypatch: pytest.MonkeyPatch) -> None:
    commands = []

    def fake_run(cmd, **kwargs):
        commands.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(meeting_launcher, "find_app_pids", lambda name: [])
    monkeypatch.setattr(meeting_launcher.subprocess, "run", fake_run)
    MacLaunchSink().launch_or_focus(ZOOM_APP_NAME, ZOOM_BUNDLE_ID)
    assert commands == [["open", "-a", ZOOM_APP_NAME]]


def test_mac_sink_failure_raises_launch_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd, "", "Unable to find application")

    monkeypatch.setattr(meeting_launcher.subprocess, "run", failing_run)
    with pytest.raises(LaunchError, match="Unable to find application"):
        MacLaunchSink().open_url("https://zoom.us/j/1", ZOOM_BUNDLE_ID)


def test_find_app_pids_matches_case_insensitively(monkeypatch: pytest.MonkeyPatch) -> None:
    class FakeProc:
        def __init__(self, pid, name):
            self.info = {"pid": pid, "name": name}

    procs = [FakeProc(10, "zoom.us"), FakeProc(11, "Finder"), FakeProc(12, None)]
    monkeypatch.setattr(meeting_launcher.psutil, "process_iter", lambda attrs: iter(procs))
    assert meeting_launcher.find_app_pids("ZOOM.US") == [10]

"""
Opens meetings in the Zoom client.

``MeetingLauncher`` decides which deep link an entry resolves to and hands it
to a launch sink.  ``MacLaunchSink`` is the real sink: it uses the macOS
``open`` command, ``psutil`` to see whether Zoom is already running, and
AppKit (when pyobjc is installed) to bring it to the front.
"""
import logging
import subprocess
from typing import List, Optional

import psutil

from zoom_meetings import (
    Entry, EntryKind, LaunchError, NotLaunchable, PasswordJoinUnsupported,
    classify, display_label,
)

# macOS-native app activation
try:
    from AppKit import NSApplicationActivateIgnoringOtherApps, NSRunningApplication
    _HAS_APPKIT = True
except ImportError:
    _HAS_APPKIT = False

logger = logging.getLogger(__name__)

ZOOM_APP_NAME = "zoom.us"
ZOOM_BUNDLE_ID = "us.zoom.xos"
ZOOM_JOIN_BASE_URL = "https://zoom.us/j/"


def find_app_pids(app_name: str) -> List[int]:
    """Return PIDs of running processes whose name contains *app_name*."""
    lower_app_name = app_name.lower()
    pids: List[int] = []
    for proc in psutil.process_iter(["pid", "name"]):
        try:
            name = proc.info["name"] or ""
            if lower_app_name in name.lower():
                pids.append(proc.info["pid"])
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            pass
    return pids


class MacLaunchSink:
    """Sends deep links to an application bundle with the ``open`` command."""

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    def _run_open(self, args: List[str]) -> None:
        cmd = ["open", *args]
        logger.debug(f"Launch: running {cmd}")
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise LaunchError(f"'open' failed with exit code {e.returncode}: {stderr}") from e
        except (OSError, subprocess.TimeoutExpired) as e:
            raise LaunchError(f"could not run 'open': {e}") from e

    def _activate_running(self, bundle_id: str) -> bool:
        if not _HAS_APPKIT:
            return False
        apps = NSRunningApplication.runningApplicationsWithBundleIdentifier_(bundle_id)
        if not apps:
            return False
        return bool(apps[0].activateWithOptions_(NSApplicationActivateIgnoringOtherApps))

    def launch_or_focus(self, app_name: str, bundle_id: Optional[str] = None) -> None:
        """Bring *app_name* to the front, starting it if needed."""
        pids = find_app_pids(app_name)
        if pids and bundle_id and self._activate_running(bundle_id):
            logger.debug(f"Launch: activated running {app_name} (pids {pids})")
            return
        if not pids:
            logger.info(f"Launch: {app_name} is not running; starting it")
        self._run_open(["-a", app_name])

    def open_url(self, url: str, bundle_id: str) -> None:
        self._run_open(["-b", bundle_id, url])


class MeetingLauncher:
    """Resolves an entry to a join link and opens it through *sink*."""

    def __init__(
        self,
        sink,
        app_name: str = ZOOM_APP_NAME,
        bundle_id: str = ZOOM_BUNDLE_ID,
        join_base_url: str = ZOOM_JOIN_BASE_URL,
    ):
        self.sink = sink
        self.app_name = app_name
        self.bundle_id = bundle_id
        self.join_base_url = join_base_url

    def join_url(self, entry: Entry) -> str:
        """The deep link *entry* opens.

        Raises:
            NotLaunchable: *entry* is a separator.
            PasswordJoinUnsupported: *entry* is an id meeting with a password.
        """
        kind = classify(entry)
        if kind is EntryKind.SEPARATOR:
            raise NotLaunchable("separators cannot be joined")
        if kind is EntryKind.URL:
            return entry.url
        if entry.password:
            raise PasswordJoinUnsupported(
                f"'{display_label(entry)}' has a password; joining by id with a "
                "password is not supported. Add the meeting's join link instead."
            )
        return self.join_base_url + entry.id

    def launch(self, entry: Entry) -> str:
        """Open *entry* in Zoom and return the link that was opened.

        Does not wait for Zoom to confirm the join.
        """
        url = self.join_url(entry)
        if classify(entry) is EntryKind.URL:
            self.sink.launch_or_focus(self.app_name, self.bundle_id)
        logger.info(f"Launch: joining '{display_label(entry)}'")
        self.sink.open_url(url, self.bundle_id)
        return url

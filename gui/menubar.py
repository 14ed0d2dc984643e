"""
Menu bar controller for Zoom Join.

Owns the meeting registry and the two surfaces built from it: the tray
menu (meetings, separators and section labels) and the remove/join
pickers.  Every registry change rebuilds both surfaces from scratch.
"""
import sys
from typing import Optional

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from gui.constants import APP_NAME, APP_VERSION, logger, setup_logging
from gui.dialogs import QtTextPrompt, ThemedMessageDialog
from gui.icons import IconManager
from gui.picker import MeetingPicker
from gui.projector import ChoiceItem, MenuItem, MenuItemKind, Projection, project
from gui.prompt_flow import prompt_for_entry
from gui.settings import LauncherSettings, load_settings
from meeting_launcher import MacLaunchSink, MeetingLauncher
from meeting_registry import MeetingRegistry
from meeting_store import JsonMeetingStore
from zoom_meetings import (
    ConfigCorrupt, Entry, LaunchError, PasswordJoinUnsupported, PersistError, display_label,
)


class ZoomJoinMenuBar:
    """The tray icon, its menu and the meeting pickers."""

    def __init__(
        self,
        settings: LauncherSettings,
        registry: Optional[MeetingRegistry] = None,
        launcher: Optional[MeetingLauncher] = None,
        prompt=None,
    ):
        self.settings = settings
        if registry is None:
            registry = MeetingRegistry(
                JsonMeetingStore(settings.meeting_file, backup_count=settings.backup_count)
            )
        self.registry = registry
        self.launcher = launcher or MeetingLauncher(MacLaunchSink())
        self.prompt = prompt or QtTextPrompt()
        self.projection = Projection(menu_items=[], choices=[])

        self.menu = QMenu()
        self.tray_icon: Optional[QSystemTrayIcon] = None

        self.remove_picker = MeetingPicker("Select meeting to remove", settings.picker)
        self.remove_picker.choice_made.connect(self._on_remove_chosen)

        self.join_picker = MeetingPicker("Select meeting to join", settings.picker)
        self.join_picker.choice_made.connect(self._on_join_chosen)

        self.command_menu = self._build_command_menu()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> "ZoomJoinMenuBar":
        """Load the meeting file and show the menu bar icon."""
        self.tray_icon = QSystemTrayIcon(IconManager.get_icon("video", template=True, size=18))
        self.tray_icon.setToolTip("Zoom")
        self.tray_icon.setContextMenu(self.menu)

        self.load_meetings()
        self.rebuild()

        self.tray_icon.show()
        logger.info("Menu bar: started")
        return self

    def stop(self) -> "ZoomJoinMenuBar":
        """Remove the menu bar icon."""
        if self.tray_icon is not None:
            self.tray_icon.hide()
            self.tray_icon = None
        self.remove_picker.hide()
        self.join_picker.hide()
        logger.info("Menu bar: stopped")
        return self

    # ------------------------------------------------------------------
    # Registry <-> surfaces
    # ------------------------------------------------------------------

    def load_meetings(self) -> bool:
        """(Re)load the meeting file; reports a corrupt file and keeps the current meetings."""
        try:
            self.registry.load()
        except ConfigCorrupt as e:
            logger.error(f"Menu bar: could not load meetings: {e}")
            ThemedMessageDialog.critical(
                None, "Meeting File Error",
                f"The meeting file could not be loaded:\n\n{e}\n\n"
                "Fix or remove the file, then choose Reload."
            )
            return False
        return True

    def save_meetings(self) -> bool:
        try:
            self.registry.save()
        except PersistError as e:
            logger.error(f"Menu bar: could not save meetings: {e}")
            ThemedMessageDialog.critical(
                None, "Save Error", f"Your meetings could not be saved:\n\n{e}"
            )
            return False
        return True

    def _after_change(self):
        self.rebuild()
        if self.settings.autosave:
            self.save_meetings()

    def rebuild(self):
        """Re-derive the menu and picker contents from the registry."""
        self.projection = project(self.registry.all())

        self.menu.clear()
        if self.settings.edit_menu:
            self._add_command_items()
        for item in self.projection.menu_items:
            self._add_menu_item(item)
        self.menu.addSeparator()
        quit_action = self.menu.addAction("Quit")
        quit_action.triggered.connect(QApplication.quit)

        self.remove_picker.set_choices(self.projection.choices)
        self.join_picker.set_choices(self.projection.choices)
        logger.debug(
            f"Menu bar: rebuilt {len(self.projection.menu_items)} menu items, "
            f"{len(self.projection.choices)} choices"
        )

    def _build_command_menu(self) -> QMenu:
        edit_menu = QMenu(APP_NAME, self.menu)

        add_action = edit_menu.addAction("Add Meeting")
        add_action.triggered.connect(self.add_meeting)

        remove_action = edit_menu.addAction("Remove Meeting")
        remove_action.triggered.connect(self.remove_picker.show_picker)

        join_action = edit_menu.addAction("Join Meeting")
        join_action.triggered.connect(self.join_picker.show_picker)

        edit_menu.addSeparator()

        reload_action = edit_menu.addAction("Reload")
        reload_action.triggered.connect(self.reload)
        return edit_menu

    def _add_command_items(self):
        # The submenu lives for the whole session; only its action is re-added
        self.menu.addMenu(self.command_menu)
        self.menu.addSeparator()

        if not self.settings.autosave:
            save_action = self.menu.addAction("Save Meetings")
            save_action.triggered.connect(self.save_meetings)
            self.menu.addSeparator()

    def _add_menu_item(self, item: MenuItem):
        if item.kind is MenuItemKind.DIVIDER:
            self.menu.addSeparator()
            return

        action = QAction(item.title, self.menu)
        if item.kind is MenuItemKind.SECTION_LABEL:
            action.setEnabled(False)
            font = action.font()
            font.setBold(True)
            action.setFont(font)
        else:
            if item.tooltip:
                action.setToolTip(item.tooltip)
            entry = item.entry
            action.triggered.connect(lambda checked=False, e=entry: self.join(e))
        self.menu.addAction(action)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_meeting(self) -> bool:
        """Prompt for a new meeting and append it."""
        entry = prompt_for_entry(self.prompt)
        if entry is None or not self.registry.append(entry):
            return False
        logger.info(f"Menu bar: added '{display_label(entry)}'")
        self._after_change()
        return True

    def reload(self):
        if self.load_meetings():
            self.rebuild()

    def join(self, entry: Entry) -> Optional[str]:
        try:
            return self.launcher.launch(entry)
        except PasswordJoinUnsupported as e:
            logger.warning(f"Menu bar: {e}")
            ThemedMessageDialog.warning(None, "Cannot Join Meeting", str(e))
        except LaunchError as e:
            logger.error(f"Menu bar: launch failed: {e}")
            ThemedMessageDialog.critical(None, "Cannot Join Meeting", str(e))
        return None

    def _on_remove_chosen(self, choice: ChoiceItem):
        if not self.registry.remove_matching(choice.text, choice.sub_text):
            return
        self._after_change()

    def _on_join_chosen(self, choice: ChoiceItem):
        self.join(choice.entry)


def main():
    """Application entry point."""
    if sys.platform != "darwin":
        print("This application only runs on macOS.")
        sys.exit(1)

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName("ZoomJoin")
    app.setQuitOnLastWindowClosed(False)

    config, settings = load_settings()
    setup_logging(config)
    logger.info(f"Application starting (version {APP_VERSION})")

    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.error("No menu bar / system tray available")
        sys.exit(1)

    menubar = ZoomJoinMenuBar(settings).start()

    exit_code = app.exec()
    menubar.stop()
    logger.info(f"Application exiting (code {exit_code})")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

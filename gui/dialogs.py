"""
Modal prompts and message boxes shown from the menu bar.
"""
from typing import Optional, Tuple

from PyQt6.QtWidgets import QInputDialog, QLineEdit, QMessageBox, QWidget

from gui.constants import APP_NAME, logger

# macOS-native activation (a menu bar app is not frontmost by default)
try:
    from AppKit import NSApp
    _HAS_APPKIT = True
except ImportError:
    _HAS_APPKIT = False


def bring_app_to_front():
    """Activate this app so modal dialogs appear above other windows."""
    if not _HAS_APPKIT:
        return
    try:
        app = NSApp()
        if app is not None:
            app.activateIgnoringOtherApps_(True)
    except Exception as e:
        logger.debug(f"Dialogs: could not activate app: {e}")


class ThemedMessageDialog:
    """Thin wrappers around QMessageBox that bring the app forward first."""

    @staticmethod
    def critical(parent: Optional[QWidget], title: str, text: str):
        bring_app_to_front()
        QMessageBox.critical(parent, title, text)

    @staticmethod
    def warning(parent: Optional[QWidget], title: str, text: str):
        bring_app_to_front()
        QMessageBox.warning(parent, title, text)


class QtTextPrompt:
    """Blocking free-text prompt backed by QInputDialog.

    Called as ``prompt(title, subtitle, default, confirm_label, cancel_label)``
    and returns ``(button_label, text)``; the button label is the confirm
    label when the user accepted, otherwise the cancel label.
    """

    def __init__(self, parent: Optional[QWidget] = None):
        self.parent = parent

    def __call__(
        self,
        title: str,
        subtitle: str,
        default: str,
        confirm_label: str,
        cancel_label: Optional[str] = "Cancel",
    ) -> Tuple[str, str]:
        bring_app_to_front()

        dialog = QInputDialog(self.parent)
        dialog.setWindowTitle(APP_NAME)
        dialog.setInputMode(QInputDialog.InputMode.TextInput)
        dialog.setLabelText(f"{title}\n{subtitle}" if subtitle else title)
        dialog.setTextValue(default or "")
        dialog.setTextEchoMode(QLineEdit.EchoMode.Normal)
        dialog.setOkButtonText(confirm_label)
        dialog.setCancelButtonText(cancel_label or "Cancel")
        dialog.resize(420, dialog.sizeHint().height())
        dialog.raise_()
        dialog.activateWindow()

        accepted = dialog.exec() == QInputDialog.DialogCode.Accepted
        text = dialog.textValue()
        dialog.deleteLater()

        if accepted:
            return confirm_label, text
        return cancel_label or "Cancel", ""

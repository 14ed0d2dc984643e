"""
Searchable meeting picker.

A small dialog with a filter box over a list of meetings.
Typing narrows the list (title and, optionally, the url/id sub-text);
Return or a double-click selects the highlighted row.
"""
from typing import List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtWidgets import (
    QApplication, QDialog, QLineEdit, QListWidget, QListWidgetItem, QVBoxLayout,
)

from gui.constants import APP_NAME, logger
from gui.dialogs import bring_app_to_front
from gui.projector import ChoiceItem, filter_choices
from gui.settings import PickerSettings

_CHOICE_ROLE = Qt.ItemDataRole.UserRole


class MeetingPicker(QDialog):
    """Pick one meeting from the current choice list."""

    choice_made = pyqtSignal(object)  # ChoiceItem

    def __init__(self, placeholder: str, settings: Optional[PickerSettings] = None, parent=None):
        super().__init__(parent)
        self.settings = settings or PickerSettings()
        self._choices: List[ChoiceItem] = []

        self.setWindowTitle(APP_NAME)
        self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        self.query_edit = QLineEdit()
        self.query_edit.setPlaceholderText(placeholder)
        self.query_edit.setClearButtonEnabled(True)
        self.query_edit.textChanged.connect(self._refresh_list)
        self.query_edit.returnPressed.connect(self._accept_current)
        layout.addWidget(self.query_edit)

        self.list_widget = QListWidget()
        self.list_widget.itemActivated.connect(self._on_item_activated)
        layout.addWidget(self.list_widget)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set_choices(self, choices: List[ChoiceItem]):
        """Replace every row with *choices*."""
        self._choices = list(choices)
        self._refresh_list()

    def visible_choices(self) -> List[ChoiceItem]:
        return [
            self.list_widget.item(row).data(_CHOICE_ROLE)
            for row in range(self.list_widget.count())
        ]

    def show_picker(self):
        self._apply_geometry()
        bring_app_to_front()
        self.show()
        self.raise_()
        self.activateWindow()
        self.query_edit.setFocus()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply_geometry(self):
        row_height = self.list_widget.sizeHintForRow(0) if self.list_widget.count() else 22
        row_height = max(row_height, 22)
        self.list_widget.setFixedHeight(row_height * self.settings.rows + 4)

        width = 480
        screen = QApplication.primaryScreen()
        if screen is not None:
            width = int(screen.availableGeometry().width() * self.settings.width_percent / 100)
        self.setFixedWidth(width)
        self.adjustSize()

    def _refresh_list(self):
        query = self.query_edit.text()
        self.list_widget.clear()
        for choice in filter_choices(self._choices, query, self.settings.search_sub_text):
            label = choice.text if not choice.sub_text else f"{choice.text}\n{choice.sub_text}"
            item = QListWidgetItem(label)
            item.setData(_CHOICE_ROLE, choice)
            if choice.sub_text:
                item.setToolTip(choice.sub_text)
            self.list_widget.addItem(item)
        if self.list_widget.count():
            self.list_widget.setCurrentRow(0)

    def _accept_current(self):
        item = self.list_widget.currentItem()
        if item is not None:
            self._on_item_activated(item)

    def _on_item_activated(self, item: QListWidgetItem):
        choice = item.data(_CHOICE_ROLE)
        self.hide()
        logger.debug(f"Picker: selected {choice.text!r}")
        self.choice_made.emit(choice)

    def keyPressEvent(self, event: QKeyEvent):
        key = event.key()
        if key == Qt.Key.Key_Escape:
            self.hide()
            return
        if key in (Qt.Key.Key_Up, Qt.Key.Key_Down) and self.query_edit.hasFocus():
            # Let arrow keys move the list selection while typing
            self.list_widget.keyPressEvent(event)
            return
        super().keyPressEvent(event)

    def hideEvent(self, event):
        # Clear the query and reset the scroll on dismissal.
        self.query_edit.blockSignals(True)
        self.query_edit.clear()
        self.query_edit.blockSignals(False)
        self._refresh_list()
        self.list_widget.scrollToTop()
        super().hideEvent(event)

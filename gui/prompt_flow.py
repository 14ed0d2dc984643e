"""
Step-by-step "Add Meeting" prompt sequence.

The flow asks the user for a join link, meeting id or ``-`` (separator),
then for whatever else that answer needs (password, section heading,
title).  Each step blocks on the prompt oracle; cancelling any step
abandons the whole sequence.  The flow only *returns* a candidate entry -
appending it to the registry is the caller's job.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from gui.constants import logger
from zoom_meetings import (
    SEPARATOR_MARKER, Entry, IdMeeting, Separator, UrlMeeting, is_meeting_url,
)

# (title, subtitle, default_text, confirm_label, cancel_label) -> (button, text)
PromptOracle = Callable[[str, str, str, str, Optional[str]], Tuple[str, str]]

ADD_MEETING_TITLE = "Add a new meeting"
CANCEL_LABEL = "Cancel"


class PromptState(enum.Enum):
    AWAITING_ENTRY_TEXT = "awaiting_entry_text"
    AWAITING_SECTION_TEXT = "awaiting_section_text"
    AWAITING_PASSWORD = "awaiting_password"
    AWAITING_TITLE = "awaiting_title"
    DONE = "done"
    CANCELLED = "cancelled"


@dataclass
class _Draft:
    url: Optional[str] = None
    meeting_id: Optional[str] = None
    password: Optional[str] = None
    title: Optional[str] = None
    section: Optional[str] = None
    is_separator: bool = False

    def build(self) -> Entry:
        if self.is_separator:
            return Separator(section=self.section)
        if self.url:
            return UrlMeeting(url=self.url, title=self.title)
        return IdMeeting(id=self.meeting_id, password=self.password, title=self.title)


class AddMeetingFlow:
    """Runs the add-meeting prompts once and returns the resulting entry."""

    def __init__(self, prompt: PromptOracle):
        self._prompt = prompt
        self.state = PromptState.AWAITING_ENTRY_TEXT
        self._draft = _Draft()

    def _ask(self, title: str, subtitle: str, default: str, confirm: str) -> Optional[str]:
        """Show one prompt; ``None`` means the user cancelled."""
        button, text = self._prompt(title, subtitle, default, confirm, CANCEL_LABEL)
        if button != confirm:
            return None
        return (text or "").strip()

    def _on_entry_text(self) -> PromptState:
        response = self._ask(
            ADD_MEETING_TITLE,
            f"Paste a join link, type a meeting id, or '{SEPARATOR_MARKER}' for a separator",
            "",
            "Add Meeting",
        )
        if not response:
            return PromptState.CANCELLED
        if response == SEPARATOR_MARKER:
            self._draft.is_separator = True
            return PromptState.AWAITING_SECTION_TEXT
        if is_meeting_url(response):
            self._draft.url = response
            return PromptState.AWAITING_TITLE
        self._draft.meeting_id = response
        return PromptState.AWAITING_PASSWORD

    def _on_section_text(self) -> PromptState:
        section = self._ask("Enter section heading", "Leave blank for a plain separator", "", "Add")
        if section is None:
            return PromptState.CANCELLED
        self._draft.section = section or None
        return PromptState.DONE

    def _on_password(self) -> PromptState:
        password = self._ask("Enter meeting password", "Leave blank if none", "", "Continue")
        if password is None:
            return PromptState.CANCELLED
        self._draft.password = password or None
        return PromptState.AWAITING_TITLE

    def _on_title(self) -> PromptState:
        default = self._draft.url or self._draft.meeting_id
        title = self._ask("Enter meeting title", "", default, "Add")
        if title is None:
            return PromptState.CANCELLED
        self._draft.title = title or None
        return PromptState.DONE

    def run(self) -> Optional[Entry]:
        """Drive the prompts to completion; ``None`` if the user backed out."""
        handlers = {
            PromptState.AWAITING_ENTRY_TEXT: self._on_entry_text,
            PromptState.AWAITING_SECTION_TEXT: self._on_section_text,
            PromptState.AWAITING_PASSWORD: self._on_password,
            PromptState.AWAITING_TITLE: self._on_title,
        }
        while self.state not in (PromptState.DONE, PromptState.CANCELLED):
            self.state = handlers[self.state]()

        if self.state is PromptState.CANCELLED:
            logger.debug("Add meeting: cancelled")
            return None
        entry = self._draft.build()
        logger.debug(f"Add meeting: prompted for {entry!r}")
        return entry


def prompt_for_entry(prompt: PromptOracle) -> Optional[Entry]:
    """Convenience wrapper: run a fresh AddMeetingFlow."""
    return AddMeetingFlow(prompt).run()

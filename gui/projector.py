"""
Builds the menu and picker contents from the registry.

Both structures are derived fresh from the registry order every time it
changes and are never edited in place.  Every selectable item keeps a
reference to the entry it came from.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from zoom_meetings import Entry, display_label, is_separator, raw_identifier


class MenuItemKind(enum.Enum):
    MEETING = "meeting"
    DIVIDER = "divider"
    SECTION_LABEL = "section_label"


@dataclass(frozen=True)
class MenuItem:
    kind: MenuItemKind
    title: str = ""
    tooltip: Optional[str] = None
    entry: Optional[Entry] = None

    @property
    def enabled(self) -> bool:
        return self.kind is MenuItemKind.MEETING


@dataclass(frozen=True)
class ChoiceItem:
    text: str
    sub_text: Optional[str]
    entry: Entry


@dataclass(frozen=True)
class Projection:
    menu_items: List[MenuItem]
    choices: List[ChoiceItem]


def _secondary_text(entry: Entry, label: str) -> Optional[str]:
    raw = raw_identifier(entry)
    return raw if raw != label else None


def build_menu_items(entries: Iterable[Entry]) -> List[MenuItem]:
    items: List[MenuItem] = []
    for entry in entries:
        if is_separator(entry):
            items.append(MenuItem(MenuItemKind.DIVIDER))
            if entry.section:
                items.append(MenuItem(MenuItemKind.SECTION_LABEL, title=entry.section))
            continue

        label = display_label(entry)
        items.append(MenuItem(
            MenuItemKind.MEETING,
            title=label,
            tooltip=_secondary_text(entry, label),
            entry=entry,
        ))
    return items


def build_choices(entries: Iterable[Entry]) -> List[ChoiceItem]:
    """Picker rows for every meeting; separators are never offered."""
    choices: List[ChoiceItem] = []
    for entry in entries:
        if is_separator(entry):
            continue
        label = display_label(entry)
        choices.append(ChoiceItem(text=label, sub_text=_secondary_text(entry, label), entry=entry))
    return choices


def project(entries: Sequence[Entry]) -> Projection:
    """Build the menu and picker structures together from one snapshot."""
    snapshot = tuple(entries)
    return Projection(menu_items=build_menu_items(snapshot), choices=build_choices(snapshot))


def filter_choices(
    choices: Iterable[ChoiceItem],
    query: str,
    search_sub_text: bool = True,
) -> List[ChoiceItem]:
    """Case-insensitive substring filter used by the picker's search box."""
    needle = query.strip().lower()
    if not needle:
        return list(choices)

    result = []
    for choice in choices:
        haystacks = [choice.text]
        if search_sub_text and choice.sub_text:
            haystacks.append(choice.sub_text)
        if any(needle in h.lower() for h in haystacks):
            result.append(choice)
    return result

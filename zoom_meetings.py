"""
Meeting entry model for Zoom Join.

An entry is one of three shapes:

* ``UrlMeeting``  - a full join link (``https://...``)
* ``IdMeeting``   - a numeric meeting id with an optional password
* ``Separator``   - a menu divider, optionally starting a labelled section

Entries are persisted as flat JSON objects with optional ``title``, ``url``,
``id``, ``password`` and ``section`` keys; ``entry_from_dict`` and
``entry_to_dict`` convert between the two forms.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

# Title used for separator entries in the meeting file and typed at the
# "Add a new meeting" prompt to request one.
SEPARATOR_MARKER = "-"

# Responses starting with this prefix are treated as join links.
MEETING_URL_PREFIX = "https://"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class MeetingError(Exception):
    """Base class for all Zoom Join errors."""


class InvalidEntry(MeetingError):
    """A meeting definition has an ambiguous or malformed shape."""


class AdjacentSeparator(MeetingError):
    """A separator would be placed directly after another separator."""


class ConfigCorrupt(MeetingError):
    """The meeting file exists but cannot be read or parsed."""


class PersistError(MeetingError):
    """The meeting file could not be written."""


class LaunchError(MeetingError):
    """A meeting could not be opened."""


class NotLaunchable(LaunchError):
    """The selected entry is a separator or has nothing to join."""


class PasswordJoinUnsupported(LaunchError):
    """Joining by id with a password needs the Zoom UI and is not supported."""


# ---------------------------------------------------------------------------
# Entry shapes
# ---------------------------------------------------------------------------

class EntryKind(enum.Enum):
    URL = "url"
    ID = "id"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class UrlMeeting:
    url: str
    title: Optional[str] = None


@dataclass(frozen=True)
class IdMeeting:
    id: str
    password: Optional[str] = field(default=None, repr=False)
    title: Optional[str] = None


@dataclass(frozen=True)
class Separator:
    section: Optional[str] = None


Entry = Union[UrlMeeting, IdMeeting, Separator]


def _clean(value: Any) -> Optional[str]:
    """Normalize an optional field: numbers become strings, blanks become None."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidEntry(f"expected a string, got {value!r}")
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        raise InvalidEntry(f"expected a string, got {type(value).__name__}")
    value = value.strip()
    return value or None


def classify(entry: Entry) -> EntryKind:
    """Return which of the three entry shapes *entry* is."""
    if isinstance(entry, UrlMeeting):
        if not entry.url:
            raise InvalidEntry("URL meeting has an empty url")
        return EntryKind.URL
    if isinstance(entry, IdMeeting):
        if not entry.id:
            raise InvalidEntry("id meeting has an empty id")
        return EntryKind.ID
    if isinstance(entry, Separator):
        return EntryKind.SEPARATOR
    raise InvalidEntry(f"not a meeting entry: {entry!r}")


def is_separator(entry: Entry) -> bool:
    return classify(entry) is EntryKind.SEPARATOR


def is_meeting_url(text: str) -> bool:
    return text.startswith(MEETING_URL_PREFIX)


def entry_url(entry: Entry) -> Optional[str]:
    return entry.url if isinstance(entry, UrlMeeting) else None


def entry_id(entry: Entry) -> Optional[str]:
    return entry.id if isinstance(entry, IdMeeting) else None


def raw_identifier(entry: Entry) -> Optional[str]:
    """The url or id an entry joins with; ``None`` for separators."""
    kind = classify(entry)
    if kind is EntryKind.URL:
        return entry.url
    if kind is EntryKind.ID:
        return entry.id
    return None


def display_label(entry: Entry) -> str:
    """Label shown in the menu and picker: title, else url, else id."""
    kind = classify(entry)
    if kind is EntryKind.SEPARATOR:
        return SEPARATOR_MARKER
    return entry.title or raw_identifier(entry)


def matches(entry: Entry, title_text: str, sub_text: Optional[str]) -> bool:
    """Check whether a picker row (title, sub-text) refers to *entry*.

    The label must match exactly and the sub-text must equal the entry's
    url or id.  A row without sub-text is one whose label is the identifier
    itself, so it only matches an entry whose url or id equals that label.
    """
    if display_label(entry) != title_text:
        return False
    if sub_text is None:
        return raw_identifier(entry) == title_text
    return sub_text == entry_url(entry) or sub_text == entry_id(entry)


# ---------------------------------------------------------------------------
# Persistence shape
# ---------------------------------------------------------------------------

def entry_from_dict(raw: Mapping[str, Any]) -> Entry:
    """Build an entry from one object of the meeting file.

    Raises:
        InvalidEntry: *raw* is not an object, or sets both ``url`` and ``id``.
    """
    if not isinstance(raw, Mapping):
        raise InvalidEntry(f"meeting definition must be an object, got {type(raw).__name__}")

    title = _clean(raw.get("title"))
    url = _clean(raw.get("url"))
    meeting_id = _clean(raw.get("id"))

    if url and meeting_id:
        raise InvalidEntry(f"meeting {title or url!r} has both a url and an id")

    if url:
        return UrlMeeting(url=url, title=title)
    if meeting_id:
        return IdMeeting(id=meeting_id, password=_clean(raw.get("password")), title=title)

    if title and title != SEPARATOR_MARKER:
        logger.debug(f"meeting {title!r} has no url or id; treating it as a separator")
    return Separator(section=_clean(raw.get("section")))


def entry_to_dict(entry: Entry) -> Dict[str, str]:
    """Flatten an entry to the meeting file shape, omitting absent fields."""
    kind = classify(entry)
    if kind is EntryKind.SEPARATOR:
        data: Dict[str, str] = {"title": SEPARATOR_MARKER}
        if entry.section:
            data["section"] = entry.section
        return data

    data = {}
    if entry.title:
        data["title"] = entry.title
    if kind is EntryKind.URL:
        data["url"] = entry.url
    else:
        data["id"] = entry.id
        if entry.password:
            data["password"] = entry.password
    return data

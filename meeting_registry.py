"""
The ordered, persisted collection of meeting entries.
"""
import logging
from typing import Iterator, List, Optional, Tuple

from meeting_store import JsonMeetingStore
from zoom_meetings import (
    AdjacentSeparator, ConfigCorrupt, Entry, InvalidEntry,
    entry_from_dict, entry_to_dict, is_separator, matches,
)

logger = logging.getLogger(__name__)


class MeetingRegistry:
    """
    Holds the user's meetings in menu order.

    The registry is the only source of truth: the menu and picker are
    rebuilt from ``all()`` after every change.  It is populated by
    ``load()``, mutated by ``append()`` / ``remove_matching()`` and written
    back in full by ``save()``.
    """

    def __init__(self, store: JsonMeetingStore, entries: Optional[List[Entry]] = None):
        self.store = store
        self._entries: List[Entry] = list(entries or [])
        self._dirty = False

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.all())

    @property
    def dirty(self) -> bool:
        """True when there are changes that have not been saved."""
        return self._dirty

    def all(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    def load(self) -> "MeetingRegistry":
        """Replace the in-memory entries with the contents of the meeting file.

        A missing file yields an empty registry.  Adjacent separators in the
        file are kept as written.

        Raises:
            ConfigCorrupt: the file could not be parsed; the current entries
                are left untouched and a copy of the file is kept aside.
        """
        try:
            loaded = self._read_entries()
        except ConfigCorrupt:
            self.store.preserve_corrupt()
            raise

        self._entries = loaded
        self._dirty = False
        logger.info(f"Registry: loaded {len(loaded)} entries from {self.store.path}")
        return self

    def _read_entries(self) -> List[Entry]:
        raw = self.store.read()
        if raw is None:
            return []
        loaded: List[Entry] = []
        for index, item in enumerate(raw):
            try:
                loaded.append(entry_from_dict(item))
            except InvalidEntry as e:
                raise ConfigCorrupt(f"{self.store.path} entry {index}: {e}") from e
        return loaded

    def save(self) -> None:
        """Write every entry, in order, to the meeting file.

        Raises:
            PersistError: the write failed; in-memory entries are unchanged.
        """
        self.store.write([entry_to_dict(entry) for entry in self._entries])
        self._dirty = False
        logger.info(f"Registry: saved {len(self._entries)} entries to {self.store.path}")

    def ensure_appendable(self, entry: Entry) -> None:
        """Raise ``AdjacentSeparator`` if *entry* cannot go at the end."""
        if is_separator(entry) and self._entries and is_separator(self._entries[-1]):
            raise AdjacentSeparator("the last entry is already a separator")

    def append(self, entry: Entry) -> bool:
        """Add *entry* to the end; returns False if it was rejected."""
        try:
            self.ensure_appendable(entry)
        except AdjacentSeparator as e:
            logger.info(f"Registry: separator not added: {e}")
            return False

        self._entries.append(entry)
        self._dirty = True
        logger.debug(f"Registry: appended {entry!r} at position {len(self._entries) - 1}")
        return True

    def remove_matching(self, title_text: str, sub_text: Optional[str]) -> bool:
        """Remove the first entry matching a picker row; returns whether one was removed."""
        found = [i for i, entry in enumerate(self._entries) if matches(entry, title_text, sub_text)]
        if not found:
            logger.debug(f"Registry: no entry matches {title_text!r} / {sub_text!r}")
            return False
        if len(found) > 1:
            logger.debug(
                f"Registry: {len(found)} entries match {title_text!r}; removing the first"
            )

        removed = self._entries.pop(found[0])
        self._dirty = True
        logger.info(f"Registry: removed {removed!r}")
        return True

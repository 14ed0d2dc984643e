"""
JSON file persistence for the meeting registry.

The meeting file is a single JSON array.  Writes go to a sibling temp file
which is then renamed over the target, so a crash mid-write never leaves a
truncated file behind.  Before each overwrite the previous file can be copied
to a timestamped backup.
"""
import json
import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from zoom_meetings import ConfigCorrupt, PersistError

logger = logging.getLogger(__name__)


def backup_json_file(json_path: Path, max_backups: int = 3) -> Optional[Path]:
    """Create a timestamped backup of a JSON file, keeping at most *max_backups*.

    Returns:
        The ``Path`` of the new backup file, or ``None`` if the source
        file does not exist or backups are disabled.
    """
    if max_backups <= 0 or not json_path.exists():
        return None

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup_path = json_path.parent / f"{json_path.name}.bak.{timestamp}"
    shutil.copy2(json_path, backup_path)
    logger.debug(f"meeting store: backed up {json_path} -> {backup_path.name}")

    # Prune old backups (keep newest max_backups)
    backups = sorted(
        json_path.parent.glob(f"{json_path.name}.bak.*"),
        key=lambda p: p.name,
        reverse=True,
    )
    for old in backups[max_backups:]:
        try:
            old.unlink()
            logger.debug(f"meeting store: pruned old backup {old.name}")
        except OSError as e:
            logger.warning(f"meeting store: could not prune {old.name}: {e}")

    return backup_path


class JsonMeetingStore:
    """Reads and writes the meeting file at a fixed path."""

    def __init__(self, path: Path, backup_count: int = 3, indent: int = 2):
        self.path = Path(path).expanduser()
        self.backup_count = backup_count
        self.indent = indent

    def read(self) -> Optional[List[Any]]:
        """Return the raw meeting array, or ``None`` when the file does not exist.

        Raises:
            ConfigCorrupt: the file exists but is unreadable, is not valid
                JSON, or its top-level value is not an array.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info(f"meeting store: {self.path} not found, starting empty")
            return None
        except json.JSONDecodeError as e:
            raise ConfigCorrupt(f"{self.path} is not valid JSON: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigCorrupt(f"could not read {self.path}: {e}") from e

        if not isinstance(data, list):
            raise ConfigCorrupt(
                f"{self.path} must contain a JSON array, found {type(data).__name__}"
            )
        return data

    def preserve_corrupt(self) -> Optional[Path]:
        """Copy the current file to ``<name>.corrupt``, outside backup rotation.

        Only the latest unreadable file is kept.  Returns the copy's path, or
        ``None`` if there was nothing to copy or the copy failed.
        """
        if not self.path.exists():
            return None
        corrupt_path = self.path.with_name(f"{self.path.name}.corrupt")
        try:
            shutil.copy2(self.path, corrupt_path)
        except OSError as e:
            logger.warning(f"meeting store: could not keep a copy of {self.path}: {e}")
            return None
        logger.warning(f"meeting store: kept unreadable meeting file as {corrupt_path.name}")
        return corrupt_path

    def write(self, data: List[Any]) -> None:
        """Atomically replace the meeting file with *data*.

        Raises:
            PersistError: the directory, backup, temp file or rename failed.
        """
        temp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            backup_json_file(self.path, max_backups=self.backup_count)
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=self.indent, ensure_ascii=False)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                logger.debug(f"meeting store: could not remove {temp_path}")
            raise PersistError(f"could not write {self.path}: {e}") from e
        logger.debug(f"meeting store: wrote {len(data)} entries to {self.path}")

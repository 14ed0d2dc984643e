"""
Application constants, logging setup, and utility functions.
"""
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional

from version import __version__

# --- Configuration Constants ---
APP_NAME = "Zoom Join"
APP_VERSION = __version__
APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "ZoomJoin"
CONFIG_PATH = APP_SUPPORT_DIR / "config.json"
DEFAULT_MEETING_FILE = APP_SUPPORT_DIR / "zoomjoin.json"
LOG_DIR = APP_SUPPORT_DIR / ".logs"

# --- Logging Setup ---
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "NONE": None,  # Disables logging entirely
}

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

# Application logger plus the loggers of the top-level library modules
logger = logging.getLogger("ZoomJoin")
_LIBRARY_LOGGERS = [
    logging.getLogger(name)
    for name in ("zoom_meetings", "meeting_registry", "meeting_store", "meeting_launcher")
]

# Track current log file path (set by setup_logging)
current_log_file_path: Optional[Path] = None


def setup_logging(config: Optional[Dict] = None, log_dir: Path = LOG_DIR):
    """Configure logging based on config file settings."""
    global current_log_file_path

    log_cfg = config.get("logging", {}) if config else {}
    log_level_str = str(log_cfg.get("level", "INFO")).upper()
    log_level = LOG_LEVELS.get(log_level_str, logging.INFO)
    log_to_file = log_cfg.get("log_to_file", True)
    log_file_name = log_cfg.get("log_file_name", "zoomjoin.log")

    all_loggers = [logger, *_LIBRARY_LOGGERS]

    # Clear existing handlers
    for lg in all_loggers:
        lg.handlers.clear()

    # If logging is disabled (NONE), set to highest level and skip handlers
    if log_level is None:
        for lg in all_loggers:
            lg.setLevel(logging.CRITICAL + 10)
        current_log_file_path = None
        return

    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    for lg in all_loggers:
        lg.addHandler(console_handler)
        lg.propagate = False

    # File handler (rotating: 2 MB max, keep 3 backups)
    if log_to_file:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            current_log_file_path = log_dir / log_file_name
            file_handler = logging.handlers.RotatingFileHandler(
                current_log_file_path,
                maxBytes=2 * 1024 * 1024,  # 2 MB
                backupCount=3,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            for lg in all_loggers:
                lg.addHandler(file_handler)
        except OSError as e:
            print(f"Failed to create log file: {e}", file=sys.stderr)
            current_log_file_path = None
    else:
        current_log_file_path = None

    for lg in all_loggers:
        lg.setLevel(log_level)


def resource_path(relative_path: str) -> Path:
    """Get absolute path to resource, works for dev and for py2app bundle."""
    if getattr(sys, 'frozen', False):
        base_path = Path(sys.executable).parent.parent / 'Resources'
    else:
        base_path = Path(__file__).parent.parent
    return base_path / relative_path


# Initial basic setup (will be reconfigured after config is loaded)
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger.setLevel(logging.INFO)

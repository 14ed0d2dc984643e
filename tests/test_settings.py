from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

import gui.constants as constants
from gui import settings as settings_mod
from gui.constants import DEFAULT_MEETING_FILE, setup_logging
from gui.settings import load_config, settings_from_dict


def test_defaults_from_empty_config() -> None:
    s = settings_from_dict({})
    assert s.meeting_file == DEFAULT_MEETING_FILE
    assert s.autosave is True
    assert s.edit_menu is True
    assert s.backup_count == 3
    assert (s.picker.rows, s.picker.width_percent, s.picker.search_sub_text) == (5, 40, True)


def test_values_from_config(tmp_path: Path) -> None:
    s = settings_from_dict({
        "meetings": {
            "meeting_file": str(tmp_path / "m.json"),
            "autosave": False,
            "edit_menu": False,
            "backup_count": 0,
        },
        "picker": {"rows": "8", "width_percent": 250},
    })
    assert s.meeting_file == tmp_path / "m.json"
    assert not s.autosave
    assert not s.edit_menu
    assert s.backup_count == 0
    assert s.picker.rows == 8
    assert s.picker.width_percent == 100


def test_bad_number_falls_back() -> None:
    assert settings_from_dict({"picker": {"rows": "many"}}).picker.rows == 5


def test_load_config_installs_bundled_default(tmp_path: Path) -> None:
    target = tmp_path / "support" / "config.json"
    config = load_config(target)
    assert target.exists()
    assert config["meetings"]["autosave"] is True


def test_load_config_invalid_json_uses_defaults(tmp_path: Path) -> None:
    target = tmp_path / "config.json"
    target.write_text("{oops", encoding="utf-8")
    assert load_config(target) == {}


def test_load_config_without_bundle(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings_mod, "resource_path", lambda name: tmp_path / "missing.json")
    assert load_config(tmp_path / "config.json") == {}


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    setup_logging({"logging": {"level": "DEBUG", "log_file_name": "test.log"}}, log_dir=tmp_path)
    try:
        assert constants.current_log_file_path == tmp_path / "test.log"
        assert constants.logger.level == logging.DEBUG
        logging.getLogger("meeting_registry").debug("hello from the registry")
        for handler in constants.logger.handlers:
            handler.flush()
        assert "hello from the registry" in (tmp_path / "test.log").read_text(encoding="utf-8")
    finally:
        setup_logging({"logging": {"level": "INFO", "log_to_file": False}})


def test_setup_logging_none_disables() -> None:
    setup_logging({"logging": {"level": "NONE"}})
    try:
        assert constants.current_log_file_path is None
        assert not constants.logger.isEnabledFor(logging.CRITICAL)
    finally:
        setup_logging({"logging": {"level": "INFO", "log_to_file": False}})


def test_bundled_config_is_valid_json() -> None:
    bundled = constants.resource_path("config.json")
    assert json.loads(bundled.read_text(encoding="utf-8"))["picker"]["rows"] == 5

# Rev 1.0.0
from __future__ import annotations

import logging
import sys

import pytest

from taskflow.utils import paths
from taskflow.utils.logging_setup import get_logger, setup_logging


@pytest.fixture()
def clean_root():
    root = logging.getLogger()
    handlers, level, hook = list(root.handlers), root.level, sys.excepthook
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    sys.excepthook = hook


def test_get_logger_namespaces_names():
    assert get_logger("gantt").name == "taskflow.gantt"
    assert get_logger("taskflow.timeline.drag").name == "taskflow.timeline.drag"


def test_setup_logging_writes_file_and_is_idempotent(tmp_path, clean_root):
    before = len(clean_root.handlers)
    logfile = setup_logging(log_dir=tmp_path, level="debug", route_qt=False)
    setup_logging(log_dir=tmp_path, level="debug", route_qt=False)
    assert len(clean_root.handlers) == before + 2
    assert clean_root.level == logging.DEBUG
    get_logger("test").debug("hello from test")
    for h in clean_root.handlers:
        h.flush()
    assert logfile == tmp_path / "taskflow.log"
    assert "hello from test" in logfile.read_text(encoding="utf-8")


def test_unknown_level_falls_back_to_info(tmp_path, clean_root, monkeypatch):
    monkeypatch.setenv("TASKFLOW_LOG_LEVEL", "chatty")
    setup_logging(log_dir=tmp_path, route_qt=False)
    assert clean_root.level == logging.INFO


def test_paths_follow_environment(tmp_path, monkeypatch):
    monkeypatch.delenv("TASKFLOW_DB", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    assert paths.db_path() == tmp_path / "data" / "taskflow" / "taskflow.db"
    assert paths.settings_path() == tmp_path / "cfg" / "taskflow" / "settings.json"
    monkeypatch.setenv("TASKFLOW_DB", str(tmp_path / "other.db"))
    assert paths.db_path() == tmp_path / "other.db"


def test_migrations_ship_with_package():
    assert (paths.MIGRATIONS_DIR / "0001_init.sql").is_file()

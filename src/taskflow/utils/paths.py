# Rev 1.0.0

"""Where TaskFlow keeps its files (XDG Base Directory layout).

    data    $XDG_DATA_HOME/taskflow/taskflow.db   (TASKFLOW_DB overrides)
    state   $XDG_STATE_HOME/taskflow/logs/
    config  $XDG_CONFIG_HOME/taskflow/settings.json

Resolved on every call so a changed environment (tests, a second profile)
is picked up without re-importing.
"""
from __future__ import annotations
import os
from pathlib import Path

APP_NAME = "taskflow"

# Shipped with the package, next to the code
MIGRATIONS_DIR = (Path(__file__).resolve().parents[1] / "data" / "migrations").resolve()


def _xdg(var: str, fallback: str) -> Path:
    return Path(os.environ.get(var) or Path.home() / fallback) / APP_NAME


def data_dir() -> Path:
    return _xdg("XDG_DATA_HOME", ".local/share")


def logs_dir() -> Path:
    return _xdg("XDG_STATE_HOME", ".local/state") / "logs"


def config_dir() -> Path:
    return _xdg("XDG_CONFIG_HOME", ".config")


def db_path() -> Path:
    override = os.environ.get("TASKFLOW_DB")
    if override:
        return Path(override).expanduser()
    return data_dir() / "taskflow.db"


def settings_path() -> Path:
    return config_dir() / "settings.json"


def ensure_dirs() -> None:
    for p in (data_dir(), logs_dir(), config_dir()):
        p.mkdir(parents=True, exist_ok=True)

# src/taskflow/utils/config.py
# Rev 1.0.0
"""JSON settings, merged one level deep over built-in defaults."""
import json
from pathlib import Path
from typing import Any, Dict, Optional

from .logging_setup import get_logger
from .paths import settings_path

log = get_logger(__name__)

_DEFAULTS: Dict[str, Any] = {
    "main_window": {
        "width": 1200,
        "height": 760,
        "is_maximized": False,
    },
    "gantt": {
        "zoom": "week",
        "group_by": "phase",
        "pad_before_days": 7,
        "pad_after_days": 14,
    },
    "tasks": {
        "due_soon_days": 3,
    },
}


def _merged(overrides: Dict[str, Any]) -> Dict[str, Any]:
    # a saved section only replaces the keys it carries
    out: Dict[str, Any] = {k: (dict(v) if isinstance(v, dict) else v) for k, v in _DEFAULTS.items()}
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key].update(value)
        else:
            out[key] = value
    return out


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    target = path or settings_path()
    if target.exists():
        try:
            return _merged(json.loads(target.read_text(encoding="utf-8")))
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable settings %s: %s", target, exc)
    return _merged({})


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    target = path or settings_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(data, indent=2), encoding="utf-8")
    log.debug("Settings saved to %s", target)

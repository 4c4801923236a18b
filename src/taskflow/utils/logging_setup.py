# Rev 1.0.0

# TaskFlow - logging setup
# Root logger gets a rotating file under the XDG state dir plus stdout.
# Qt warnings and uncaught exceptions are routed into the same stream.
from __future__ import annotations
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .paths import APP_NAME, logs_dir

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
MAX_BYTES = 5_000_000
BACKUP_COUNT = 7

# marks the handlers this module installed, so a second call replaces them
_OWNED = "_taskflow_handler"


def get_logger(name: str) -> logging.Logger:
    """Loggers live under the `taskflow` namespace so one level switch covers the app."""
    if name == APP_NAME or name.startswith(APP_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_NAME}.{name}")


def _level(explicit: Optional[str]) -> int:
    name = (explicit or os.environ.get("TASKFLOW_LOG_LEVEL") or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _install_qt_handler() -> None:
    try:
        from PySide6.QtCore import QtMsgType, qInstallMessageHandler
    except ImportError:
        return
    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _qt_handler(msg_type, context, message):
        logging.getLogger("qt").log(levels.get(msg_type, logging.INFO), message)

    qInstallMessageHandler(_qt_handler)


def _excepthook(exctype, value, tb):
    if not issubclass(exctype, KeyboardInterrupt):
        logging.getLogger("unhandled").error("Uncaught exception", exc_info=(exctype, value, tb))
    sys.__excepthook__(exctype, value, tb)


def setup_logging(
    app_name: str = APP_NAME,
    *,
    level: Optional[str] = None,
    log_dir: Optional[Path] = None,
    route_qt: bool = True,
) -> Path:
    """Configure the root logger and return the log file path. Safe to call twice."""
    lvl = _level(level)
    directory = log_dir or logs_dir()
    directory.mkdir(parents=True, exist_ok=True)
    logfile = directory / f"{app_name}.log"

    root = logging.getLogger()
    for h in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(h)
        h.close()
    root.setLevel(lvl)

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATEFMT)
    fh = RotatingFileHandler(logfile, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8")
    ch = logging.StreamHandler(sys.stdout)
    for h in (fh, ch):
        h.setFormatter(formatter)
        h.setLevel(lvl)
        setattr(h, _OWNED, True)
        root.addHandler(h)

    sys.excepthook = _excepthook
    if route_qt:
        _install_qt_handler()

    get_logger(__name__).info("Logging initialized at %s; file: %s", logging.getLevelName(lvl), logfile)
    return logfile

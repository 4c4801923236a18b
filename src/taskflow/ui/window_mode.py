# Rev 1.0.0

# ui/window_mode.py
from __future__ import annotations
from typing import Any, Mapping

from PySide6.QtCore import Qt, QRect
from PySide6.QtGui import QGuiApplication


def _available(win) -> QRect:
    screen = QGuiApplication.screenAt(win.frameGeometry().center()) or QGuiApplication.primaryScreen()
    return screen.availableGeometry()


def restore_main_window(win, settings: Mapping[str, Any]) -> None:
    """
    Size the main window from the `main_window` settings section, clamped to
    the screen. Opens maximized when it was closed maximized.
    """
    section = settings.get("main_window", {})
    rect = _available(win)
    w = min(int(section.get("width", 1200)), rect.width())
    h = min(int(section.get("height", 760)), rect.height())
    win.setWindowFlag(Qt.WindowMaximizeButtonHint, True)
    win.resize(w, h)
    if section.get("is_maximized"):
        win.showMaximized()
    else:
        win.show()


def main_window_state(win) -> dict:
    """Counterpart of restore_main_window, for saving on close."""
    size = win.normalGeometry().size() if win.isMaximized() else win.size()
    return {"width": size.width(), "height": size.height(), "is_maximized": win.isMaximized()}


def lock_dialog_fixed(win, *, width_ratio=0.4, height_ratio=0.6):
    """
    For modal dialogs: keep them *not* maximized, but non-resizable and sized
    as a fraction of the current screen.
    """
    rect = _available(win)
    w = int(rect.width() * width_ratio)
    h = int(rect.height() * height_ratio)
    win.setFixedSize(w, h)
    win.setWindowFlag(Qt.WindowMaximizeButtonHint, False)

# Rev 1.0.0
# Small editors shared by the dialogs
from __future__ import annotations
from datetime import date
from typing import Optional

from PySide6.QtCore import QDate, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QCheckBox, QColorDialog, QDateEdit, QHBoxLayout, QPushButton, QWidget


class OptionalDateEdit(QWidget):
    """Date picker with a checkbox; unchecked means no date."""

    def __init__(self, value: Optional[date] = None, parent: QWidget | None = None):
        super().__init__(parent)
        self._enabled = QCheckBox()
        self._edit = QDateEdit()
        self._edit.setCalendarPopup(True)
        self._edit.setDisplayFormat("yyyy-MM-dd")
        self._enabled.toggled.connect(self._edit.setEnabled)

        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(self._enabled)
        lay.addWidget(self._edit, 1)
        self.set_value(value)

    def set_value(self, value: Optional[date]) -> None:
        self._enabled.setChecked(value is not None)
        self._edit.setEnabled(value is not None)
        d = value or date.today()
        self._edit.setDate(QDate(d.year, d.month, d.day))

    def value(self) -> Optional[date]:
        if not self._enabled.isChecked():
            return None
        q = self._edit.date()
        return date(q.year(), q.month(), q.day())


class ColorButton(QPushButton):
    colorChanged = Signal(str)

    def __init__(self, color: Optional[str] = None, parent: QWidget | None = None):
        super().__init__(parent)
        self._color = color or "#3B82F6"
        self.clicked.connect(self._pick)
        self._paint()

    def color(self) -> str:
        return self._color

    def _pick(self) -> None:
        chosen = QColorDialog.getColor(QColor(self._color), self, "Pick a colour")
        if chosen.isValid():
            self._color = chosen.name().upper()
            self._paint()
            self.colorChanged.emit(self._color)

    def _paint(self) -> None:
        self.setText(self._color)
        self.setStyleSheet(f"QPushButton {{ background: {self._color}; color: white; }}")

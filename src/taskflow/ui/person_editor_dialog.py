# Rev 1.0.0
from __future__ import annotations
from typing import Any, Dict, Optional

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QCheckBox,
    QDialogButtonBox, QComboBox, QWidget, QMessageBox
)

from taskflow.models.entities import Person
from taskflow.models.types import PERSON_TYPE_LABELS
from taskflow.ui.widgets import ColorButton
from taskflow.ui.window_mode import lock_dialog_fixed


class PersonEditorDialog(QDialog):
    def __init__(self, parent: QWidget | None = None, *, person: Optional[Person] = None):
        super().__init__(parent)
        self.setWindowTitle("Edit Person" if person else "New Person")

        self._name = QLineEdit(person.name if person else "")
        self._email = QLineEdit(person.email or "" if person else "")
        self._cmb_type = QComboBox()
        for key, label in PERSON_TYPE_LABELS.items():
            self._cmb_type.addItem(label, key)
        ix = self._cmb_type.findData(person.type if person else "internal")
        if ix >= 0:
            self._cmb_type.setCurrentIndex(ix)
        self._color = ColorButton(person.color if person else "#3B82F6")
        self._active = QCheckBox("Active")
        self._active.setChecked(person.active if person else True)

        form = QFormLayout()
        form.addRow("Name:", self._name)
        form.addRow("E-mail:", self._email)
        form.addRow("Type:", self._cmb_type)
        form.addRow("Colour:", self._color)
        form.addRow("", self._active)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self._on_accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)
        lock_dialog_fixed(self, width_ratio=0.25, height_ratio=0.35)

    def _on_accept(self) -> None:
        if not self._name.text().strip():
            QMessageBox.warning(self, "Person", "Name is required.")
            return
        self.accept()

    def values(self) -> Dict[str, Any]:
        return {
            "name": self._name.text().strip(),
            "email": self._email.text().strip() or None,
            "type": self._cmb_type.currentData(),
            "color": self._color.color(),
            "active": self._active.isChecked(),
        }

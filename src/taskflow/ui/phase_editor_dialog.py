# Rev 1.0.0
from __future__ import annotations
from typing import Any, Dict, Optional

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit,
    QDialogButtonBox, QSpinBox, QWidget, QMessageBox
)

from taskflow.models.entities import Phase
from taskflow.ui.widgets import ColorButton, OptionalDateEdit
from taskflow.ui.window_mode import lock_dialog_fixed


class PhaseEditorDialog(QDialog):
    def __init__(self, parent: QWidget | None = None, *, phase: Optional[Phase] = None, next_order: int = 0):
        super().__init__(parent)
        self.setWindowTitle("Edit Phase" if phase else "New Phase")

        self._name = QLineEdit(phase.name if phase else "")
        self._order = QSpinBox()
        self._order.setRange(0, 999)
        self._order.setValue(phase.order if phase else next_order)
        self._color = ColorButton(phase.color if phase else "#8B5CF6")
        self._start = OptionalDateEdit(phase.start_date if phase else None)
        self._end = OptionalDateEdit(phase.end_date if phase else None)
        self._desc = QTextEdit()
        self._desc.setAcceptRichText(False)
        self._desc.setPlainText(phase.description or "" if phase else "")

        form = QFormLayout()
        form.addRow("Name:", self._name)
        form.addRow("Order:", self._order)
        form.addRow("Colour:", self._color)
        form.addRow("Start:", self._start)
        form.addRow("End:", self._end)
        form.addRow("Description:", self._desc)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self._on_accept)
        btns.rejected.connect(self.reject)
        self.delete_requested = False
        if phase is not None:
            btn_delete = btns.addButton("Delete", QDialogButtonBox.DestructiveRole)
            btn_delete.clicked.connect(self._on_delete)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)
        lock_dialog_fixed(self, width_ratio=0.3, height_ratio=0.5)

    def _on_delete(self) -> None:
        self.delete_requested = True
        self.accept()

    def _on_accept(self) -> None:
        if not self._name.text().strip():
            QMessageBox.warning(self, "Phase", "Name is required.")
            return
        start, end = self._start.value(), self._end.value()
        if start and end and end < start:
            QMessageBox.warning(self, "Phase", "End date is before start date.")
            return
        self.accept()

    def values(self) -> Dict[str, Any]:
        return {
            "name": self._name.text().strip(),
            "order": self._order.value(),
            "color": self._color.color(),
            "start_date": self._start.value(),
            "end_date": self._end.value(),
            "description": self._desc.toPlainText().strip() or None,
        }

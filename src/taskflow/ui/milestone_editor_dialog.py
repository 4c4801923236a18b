# Rev 1.0.0
from __future__ import annotations
from datetime import date
from typing import Any, Dict, Optional, Sequence

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit, QCheckBox,
    QDialogButtonBox, QComboBox, QWidget, QMessageBox
)

from taskflow.models.entities import Milestone, Phase
from taskflow.ui.widgets import ColorButton, OptionalDateEdit
from taskflow.ui.window_mode import lock_dialog_fixed


class MilestoneEditorDialog(QDialog):
    """Date is mandatory; an end date turns the milestone into a range."""

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        phases: Sequence[Phase] = (),
        milestone: Optional[Milestone] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Edit Milestone" if milestone else "New Milestone")

        self._name = QLineEdit(milestone.name if milestone else "")
        self._date = OptionalDateEdit(milestone.date if milestone else date.today())
        self._end = OptionalDateEdit(milestone.end_date if milestone else None)
        self._cmb_phase = QComboBox()
        self._cmb_phase.addItem("(project level)", None)
        for ph in sorted(phases, key=lambda p: p.order):
            self._cmb_phase.addItem(ph.name, ph.id)
        ix = self._cmb_phase.findData(milestone.phase_id if milestone else None)
        if ix >= 0:
            self._cmb_phase.setCurrentIndex(ix)
        self._completed = QCheckBox("Reached")
        self._completed.setChecked(bool(milestone and milestone.completed))
        self._color = ColorButton(milestone.color if milestone else "#EAB308")
        self._desc = QTextEdit()
        self._desc.setAcceptRichText(False)
        self._desc.setPlainText(milestone.description or "" if milestone else "")

        form = QFormLayout()
        form.addRow("Name:", self._name)
        form.addRow("Date:", self._date)
        form.addRow("Until:", self._end)
        form.addRow("Phase:", self._cmb_phase)
        form.addRow("", self._completed)
        form.addRow("Colour:", self._color)
        form.addRow("Description:", self._desc)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self._on_accept)
        btns.rejected.connect(self.reject)
        # set when the user picks Delete; the caller removes the milestone
        self.delete_requested = False
        if milestone is not None:
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
            QMessageBox.warning(self, "Milestone", "Name is required.")
            return
        start, end = self._date.value(), self._end.value()
        if start is None:
            QMessageBox.warning(self, "Milestone", "A milestone needs a date.")
            return
        if end and end < start:
            QMessageBox.warning(self, "Milestone", "End date is before the date.")
            return
        self.accept()

    def values(self) -> Dict[str, Any]:
        return {
            "name": self._name.text().strip(),
            "date": self._date.value(),
            "end_date": self._end.value(),
            "phase_id": self._cmb_phase.currentData(),
            "completed": self._completed.isChecked(),
            "color": self._color.color(),
            "description": self._desc.toPlainText().strip() or None,
        }

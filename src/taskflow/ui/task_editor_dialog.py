# src/taskflow/ui/task_editor_dialog.py
# Rev 1.0.0
from __future__ import annotations
from typing import Any, Dict, Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit,
    QDialogButtonBox, QComboBox, QLabel, QSpinBox, QWidget, QMessageBox
)

from taskflow.models.entities import Person, Phase, Task
from taskflow.models.types import PRIORITY_LABELS, STATUS_LABELS, TASK_PRIORITIES, TASK_STATUSES
from taskflow.ui.widgets import OptionalDateEdit
from taskflow.ui.window_mode import lock_dialog_fixed


class TaskEditorDialog(QDialog):
    """
    Create/edit a task. values() returns the keyword fields for
    DataViewModel.add_task / update_task (project_id excluded).
    """

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        phases: Sequence[Phase] = (),
        people: Sequence[Person] = (),
        task: Optional[Task] = None,
        phase_id: Optional[str] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Edit Task" if task else "New Task")

        self._name = QLineEdit(task.name if task else "")
        self._desc = QTextEdit()
        self._desc.setAcceptRichText(False)
        self._desc.setPlainText(task.description or "" if task else "")

        self._cmb_phase = QComboBox()
        self._cmb_phase.addItem("(no phase)", None)
        for ph in sorted(phases, key=lambda p: p.order):
            self._cmb_phase.addItem(ph.name, ph.id)
        self._select(self._cmb_phase, task.phase_id if task else phase_id)

        self._cmb_responsible = QComboBox()
        self._cmb_responsible.addItem("(unassigned)", None)
        for person in people:
            if person.active or (task and task.responsible_id == person.id):
                self._cmb_responsible.addItem(person.name, person.id)
        self._select(self._cmb_responsible, task.responsible_id if task else None)

        self._cmb_status = QComboBox()
        for s in TASK_STATUSES:
            self._cmb_status.addItem(STATUS_LABELS[s], s)
        self._select(self._cmb_status, task.status if task else "pending")

        self._cmb_priority = QComboBox()
        for p in TASK_PRIORITIES:
            self._cmb_priority.addItem(PRIORITY_LABELS[p], p)
        self._select(self._cmb_priority, task.priority if task else "medium")

        self._start = OptionalDateEdit(task.start_date if task else None)
        self._end = OptionalDateEdit(task.end_date if task else None)
        self._sprint = OptionalDateEdit(task.sprint_date if task else None)

        # 0 means "not tracked"
        self._quantity = QSpinBox()
        self._quantity.setRange(0, 1_000_000)
        self._quantity.setValue(task.quantity or 0 if task else 0)
        self._collected = QSpinBox()
        self._collected.setRange(0, 1_000_000)
        self._collected.setValue(task.collected or 0 if task else 0)

        self._observation = QTextEdit()
        self._observation.setAcceptRichText(False)
        self._observation.setPlainText(task.observation or "" if task else "")

        form = QFormLayout()
        form.addRow("Name:", self._name)
        form.addRow("Description:", self._desc)
        form.addRow(QLabel("<hr/>"))
        form.addRow("Phase:", self._cmb_phase)
        form.addRow("Responsible:", self._cmb_responsible)
        form.addRow("Status:", self._cmb_status)
        form.addRow("Priority:", self._cmb_priority)
        form.addRow("Start:", self._start)
        form.addRow("End:", self._end)
        form.addRow("Sprint:", self._sprint)
        form.addRow("Quantity:", self._quantity)
        form.addRow("Collected:", self._collected)
        form.addRow("Observation:", self._observation)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self._on_accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)

        lock_dialog_fixed(self, width_ratio=0.4, height_ratio=0.8)
        self._name.setFocus(Qt.OtherFocusReason)

    @staticmethod
    def _select(combo: QComboBox, data) -> None:
        ix = combo.findData(data)
        if ix >= 0:
            combo.setCurrentIndex(ix)

    def _on_accept(self) -> None:
        if not self._name.text().strip():
            QMessageBox.warning(self, "Task", "Name is required.")
            return
        start, end = self._start.value(), self._end.value()
        if start and end and end < start:
            QMessageBox.warning(self, "Task", "End date is before the start date.")
            return
        self.accept()

    def values(self) -> Dict[str, Any]:
        quantity = self._quantity.value()
        return {
            "name": self._name.text().strip(),
            "description": self._desc.toPlainText().strip() or None,
            "phase_id": self._cmb_phase.currentData(),
            "responsible_id": self._cmb_responsible.currentData(),
            "status": self._cmb_status.currentData(),
            "priority": self._cmb_priority.currentData(),
            "start_date": self._start.value(),
            "end_date": self._end.value(),
            "sprint_date": self._sprint.value(),
            "quantity": quantity or None,
            "collected": self._collected.value() if quantity else None,
            "observation": self._observation.toPlainText().strip() or None,
        }

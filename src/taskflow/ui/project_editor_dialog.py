# Rev 1.0.0
from __future__ import annotations
from typing import Any, Dict, Optional

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit,
    QDialogButtonBox, QComboBox, QWidget, QMessageBox
)

from taskflow.models.entities import Project
from taskflow.models.types import PROJECT_STATUS_LABELS, PROJECT_STATUSES
from taskflow.ui.widgets import OptionalDateEdit
from taskflow.ui.window_mode import lock_dialog_fixed


class ProjectEditorDialog(QDialog):
    def __init__(self, parent: QWidget | None = None, *, project: Optional[Project] = None):
        super().__init__(parent)
        self.setWindowTitle("Edit Project" if project else "New Project")

        self._name = QLineEdit(project.name if project else "")
        self._desc = QTextEdit()
        self._desc.setAcceptRichText(False)
        self._desc.setPlainText(project.description or "" if project else "")
        self._cmb_status = QComboBox()
        for s in PROJECT_STATUSES:
            self._cmb_status.addItem(PROJECT_STATUS_LABELS[s], s)
        ix = self._cmb_status.findData(project.status if project else "planning")
        if ix >= 0:
            self._cmb_status.setCurrentIndex(ix)
        self._start = OptionalDateEdit(project.start_date if project else None)
        self._end = OptionalDateEdit(project.end_date if project else None)

        form = QFormLayout()
        form.addRow("Name:", self._name)
        form.addRow("Description:", self._desc)
        form.addRow("Status:", self._cmb_status)
        form.addRow("Start:", self._start)
        form.addRow("End:", self._end)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self._on_accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)
        lock_dialog_fixed(self, width_ratio=0.3, height_ratio=0.45)

    def _on_accept(self) -> None:
        if not self._name.text().strip():
            QMessageBox.warning(self, "Project", "Name is required.")
            return
        self.accept()

    def values(self) -> Dict[str, Any]:
        return {
            "name": self._name.text().strip(),
            "description": self._desc.toPlainText().strip() or None,
            "status": self._cmb_status.currentData(),
            "start_date": self._start.value(),
            "end_date": self._end.value(),
        }

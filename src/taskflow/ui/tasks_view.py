# src/taskflow/ui/tasks_view.py
# Rev 1.0.0 - task table for one project (or all projects)
from __future__ import annotations
from datetime import date
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView,
    QHBoxLayout, QPushButton, QLineEdit
)

from taskflow.models.entities import Task
from taskflow.models.types import PRIORITY_LABELS, STATUS_LABELS
from taskflow.services.task_status import DUE_SOON_DAYS, is_due_soon, is_overdue, progress_percent
from taskflow.viewmodels.data_viewmodel import DataViewModel

_COLUMNS = ["Name", "Phase", "Responsible", "Status", "Priority", "Start", "End", "Progress"]


def _fmt(d: Optional[date]) -> str:
    return d.strftime("%d/%m/%Y") if d else "—"


class TasksView(QWidget):
    addTaskRequested = Signal()
    editTaskRequested = Signal(str)
    deleteTaskRequested = Signal(str)
    addPhaseRequested = Signal()

    def __init__(self, data: DataViewModel, *, due_soon_days: int = DUE_SOON_DAYS, parent=None):
        super().__init__(parent)
        self._data = data
        self._due_soon_days = due_soon_days
        self._project_id: Optional[str] = None

        # ---------- Controls ----------
        self._btn_new = QPushButton("New Task")
        self._btn_edit = QPushButton("Edit")
        self._btn_delete = QPushButton("Delete")
        self._btn_phase = QPushButton("New Phase")
        self._search = QLineEdit()
        self._search.setPlaceholderText("Search tasks…")
        self._search.setClearButtonEnabled(True)

        self._btn_edit.setEnabled(False)
        self._btn_delete.setEnabled(False)

        # ---------- Table ----------
        self._table = QTableWidget(0, len(_COLUMNS))
        self._table.setHorizontalHeaderLabels(_COLUMNS)
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.itemDoubleClicked.connect(self._on_item_double_clicked)
        self._table.itemSelectionChanged.connect(self._on_selection_changed)

        hdr = self._table.horizontalHeader()
        hdr.setStretchLastSection(False)
        hdr.setSectionResizeMode(0, QHeaderView.Stretch)
        for c in range(1, len(_COLUMNS)):
            hdr.setSectionResizeMode(c, QHeaderView.ResizeToContents)

        vh = self._table.verticalHeader()
        vh.setVisible(False)
        vh.setDefaultSectionSize(22)
        self._table.setWordWrap(False)
        self._table.setAlternatingRowColors(True)

        top_bar = QHBoxLayout()
        top_bar.addWidget(self._btn_new)
        top_bar.addWidget(self._btn_edit)
        top_bar.addWidget(self._btn_delete)
        top_bar.addSpacing(12)
        top_bar.addWidget(self._btn_phase)
        top_bar.addStretch(1)
        top_bar.addWidget(self._search)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addLayout(top_bar)
        root.addWidget(self._table, 1)

        # ---------- Wiring ----------
        self._btn_new.clicked.connect(lambda: self.addTaskRequested.emit())
        self._btn_phase.clicked.connect(lambda: self.addPhaseRequested.emit())
        self._btn_edit.clicked.connect(self._on_edit_clicked)
        self._btn_delete.clicked.connect(self._on_delete_clicked)
        self._search.textChanged.connect(lambda _t: self.reload())
        self._data.changed.connect(self.reload)

    # ---------- Public API ----------
    def load_for_project(self, project_id: Optional[str]) -> None:
        self._project_id = project_id
        self._btn_new.setEnabled(project_id is not None)
        self._btn_phase.setEnabled(project_id is not None)
        self.reload()

    def reload(self) -> None:
        tasks = self._data.tasks if self._project_id is None else self._data.tasks_for_project(self._project_id)
        needle = self._search.text().strip().lower()
        if needle:
            tasks = [t for t in tasks if needle in t.name.lower() or needle in (t.description or "").lower()]
        self._render(tasks)

    # ---------- Internals ----------
    def _render(self, tasks: list[Task]) -> None:
        selected = self._selected_task_id()
        today = date.today()
        self._table.setRowCount(len(tasks))
        for r, t in enumerate(tasks):
            phase = self._data.phase(t.phase_id) if t.phase_id else None
            person = self._data.person(t.responsible_id) if t.responsible_id else None
            cells = [
                t.name,
                phase.name if phase else "—",
                person.name if person else "—",
                STATUS_LABELS.get(t.status, t.status),
                PRIORITY_LABELS.get(t.priority, t.priority),
                _fmt(t.start_date),
                _fmt(t.end_date),
                f"{progress_percent(t)}%",
            ]
            late, soon = is_overdue(t, today), is_due_soon(t, today, self._due_soon_days)
            for c, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setData(Qt.UserRole, t.id)
                if late:
                    item.setForeground(QColor("#B91C1C"))
                elif soon and c == 6:
                    item.setForeground(QColor("#A16207"))
                self._table.setItem(r, c, item)
            if t.id == selected:
                self._table.selectRow(r)
        self._on_selection_changed()

    def _selected_task_id(self) -> Optional[str]:
        items = self._table.selectedItems()
        if not items:
            return None
        return items[0].data(Qt.UserRole)

    def _on_selection_changed(self) -> None:
        has = self._selected_task_id() is not None
        self._btn_edit.setEnabled(has)
        self._btn_delete.setEnabled(has)

    def _on_item_double_clicked(self, item: QTableWidgetItem) -> None:
        if item is not None and item.data(Qt.UserRole):
            self.editTaskRequested.emit(item.data(Qt.UserRole))

    def _on_edit_clicked(self) -> None:
        tid = self._selected_task_id()
        if tid:
            self.editTaskRequested.emit(tid)

    def _on_delete_clicked(self) -> None:
        tid = self._selected_task_id()
        if tid:
            self.deleteTaskRequested.emit(tid)

# Rev 1.0.0
# taskflow - Main Window: project list on the left, Tasks | Gantt tabs on the right

from __future__ import annotations
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QListWidget,
    QListWidgetItem, QSplitter, QTabWidget, QMessageBox, QDialog, QLabel
)

from taskflow.app_context import AppContext
from taskflow.models.types import PROJECT_STATUS_LABELS
from taskflow.ui.gantt_view import GanttView
from taskflow.ui.milestone_editor_dialog import MilestoneEditorDialog
from taskflow.ui.person_editor_dialog import PersonEditorDialog
from taskflow.ui.phase_editor_dialog import PhaseEditorDialog
from taskflow.ui.project_editor_dialog import ProjectEditorDialog
from taskflow.ui.task_editor_dialog import TaskEditorDialog
from taskflow.ui.tasks_view import TasksView
from taskflow.ui.window_mode import main_window_state
from taskflow.utils.config import save_settings
from taskflow.utils.logging_setup import get_logger

log = get_logger(__name__)

_ALL_PROJECTS = "All projects"


class MainWindow(QMainWindow):
    def __init__(self, ctx: AppContext, *, logfile: str | None = None, parent=None):
        super().__init__(parent)
        self._ctx = ctx
        self._data = ctx.data
        self._project_id: Optional[str] = None

        self.setWindowTitle("TaskFlow")

        # ---- left: projects ----
        self._projects = QListWidget()
        self._projects.currentItemChanged.connect(self._on_project_changed)
        self._btn_new_project = QPushButton("New Project")
        self._btn_edit_project = QPushButton("Edit")
        self._btn_delete_project = QPushButton("Delete")
        self._btn_new_person = QPushButton("New Person")
        self._btn_new_project.clicked.connect(self._new_project)
        self._btn_edit_project.clicked.connect(self._edit_project)
        self._btn_delete_project.clicked.connect(self._delete_project)
        self._btn_new_person.clicked.connect(self._new_person)

        left = QWidget()
        lv = QVBoxLayout(left)
        lv.setContentsMargins(0, 0, 0, 0)
        lv.addWidget(QLabel("Projects"))
        lv.addWidget(self._projects, 1)
        row = QHBoxLayout()
        row.addWidget(self._btn_new_project)
        row.addWidget(self._btn_edit_project)
        row.addWidget(self._btn_delete_project)
        lv.addLayout(row)
        lv.addWidget(self._btn_new_person)

        # ---- right: tabs ----
        self._tasks_view = TasksView(
            self._data, due_soon_days=int(ctx.settings.get("tasks", {}).get("due_soon_days", 3))
        )
        self._gantt_view = GanttView(ctx.gantt)
        self._tabs = QTabWidget()
        self._tabs.addTab(self._tasks_view, "Tasks")
        self._tabs.addTab(self._gantt_view, "Gantt")

        split = QSplitter(Qt.Horizontal, self)
        split.addWidget(left)
        split.addWidget(self._tabs)
        split.setStretchFactor(0, 1)
        split.setStretchFactor(1, 4)
        split.setSizes([240, 960])
        self.setCentralWidget(split)

        if logfile:
            self.statusBar().showMessage(f"Log: {logfile}")

        # ---- wiring ----
        for view in (self._tasks_view, self._gantt_view):
            view.addTaskRequested.connect(self._new_task)
            view.editTaskRequested.connect(self._edit_task)
            view.deleteTaskRequested.connect(self._delete_task)
        self._tasks_view.addPhaseRequested.connect(self._new_phase)
        self._gantt_view.addMilestoneRequested.connect(self._new_milestone)
        self._gantt_view.milestoneEdited.connect(self._edit_milestone)
        self._gantt_view.phaseEditRequested.connect(self._edit_phase)
        self._data.projectsChanged.connect(self._reload_projects)
        self._data.errorRaised.connect(self._on_error)

        self._reload_projects()

    # -------------------- projects --------------------

    def _reload_projects(self) -> None:
        current = self._project_id
        self._projects.blockSignals(True)
        self._projects.clear()
        all_item = QListWidgetItem(_ALL_PROJECTS)
        all_item.setData(Qt.UserRole, None)
        self._projects.addItem(all_item)
        select = all_item
        for p in self._data.projects:
            item = QListWidgetItem(f"{p.name}  [{PROJECT_STATUS_LABELS.get(p.status, p.status)}]")
            item.setData(Qt.UserRole, p.id)
            self._projects.addItem(item)
            if p.id == current:
                select = item
        self._projects.blockSignals(False)
        self._projects.setCurrentItem(select)
        self._on_project_changed(select, None)

    def _on_project_changed(self, item: QListWidgetItem | None, _prev) -> None:
        pid = item.data(Qt.UserRole) if item is not None else None
        self._project_id = pid
        self._btn_edit_project.setEnabled(pid is not None)
        self._btn_delete_project.setEnabled(pid is not None)
        self._tasks_view.load_for_project(pid)
        self._gantt_view.set_project(pid)

    def _new_project(self) -> None:
        dlg = ProjectEditorDialog(self)
        if dlg.exec() == QDialog.Accepted:
            project = self._data.add_project(**dlg.values())
            if project is not None:
                self._project_id = project.id
                self._reload_projects()

    def _edit_project(self) -> None:
        project = self._data.project(self._project_id) if self._project_id else None
        if project is None:
            return
        dlg = ProjectEditorDialog(self, project=project)
        if dlg.exec() == QDialog.Accepted:
            self._data.update_project(project.id, **dlg.values())

    def _delete_project(self) -> None:
        project = self._data.project(self._project_id) if self._project_id else None
        if project is None:
            return
        answer = QMessageBox.question(
            self, "Delete project",
            f"Delete '{project.name}' with all its phases, tasks and milestones?",
        )
        if answer == QMessageBox.Yes:
            self._project_id = None
            self._data.delete_project(project.id)

    def _new_person(self) -> None:
        dlg = PersonEditorDialog(self)
        if dlg.exec() == QDialog.Accepted:
            self._data.add_person(**dlg.values())

    # -------------------- phases --------------------

    def _new_phase(self) -> None:
        if self._project_id is None:
            return
        phases = self._data.phases_for_project(self._project_id)
        next_order = max((p.order for p in phases), default=-1) + 1
        dlg = PhaseEditorDialog(self, next_order=next_order)
        if dlg.exec() == QDialog.Accepted:
            self._data.add_phase(project_id=self._project_id, **dlg.values())

    def _edit_phase(self, phase_id: str) -> None:
        phase = self._data.phase(phase_id)
        if phase is None:
            return
        dlg = PhaseEditorDialog(self, phase=phase)
        if dlg.exec() != QDialog.Accepted:
            return
        if not dlg.delete_requested:
            self._data.update_phase(phase_id, **dlg.values())
            return
        answer = QMessageBox.question(
            self, "Delete phase",
            f"Delete '{phase.name}'? Its tasks and milestones stay, without a phase.",
        )
        if answer == QMessageBox.Yes:
            self._data.delete_phase(phase_id)

    # -------------------- tasks --------------------

    def _new_task(self) -> None:
        if self._project_id is None:
            return
        dlg = TaskEditorDialog(
            self,
            phases=self._data.phases_for_project(self._project_id),
            people=self._data.people,
        )
        if dlg.exec() == QDialog.Accepted:
            values = dlg.values()
            name = values.pop("name")
            self._data.add_task(project_id=self._project_id, name=name, **values)

    def _edit_task(self, task_id: str) -> None:
        task = self._data.task(task_id)
        if task is None:
            return
        dlg = TaskEditorDialog(
            self,
            phases=self._data.phases_for_project(task.project_id),
            people=self._data.people,
            task=task,
        )
        if dlg.exec() == QDialog.Accepted:
            self._data.update_task(task_id, **dlg.values())

    def _delete_task(self, task_id: str) -> None:
        task = self._data.task(task_id)
        if task is None:
            return
        answer = QMessageBox.question(self, "Delete task", f"Delete '{task.name}'?")
        if answer == QMessageBox.Yes:
            self._data.delete_task(task_id)

    # -------------------- milestones --------------------

    def _new_milestone(self) -> None:
        if self._project_id is None:
            return
        dlg = MilestoneEditorDialog(self, phases=self._data.phases_for_project(self._project_id))
        if dlg.exec() == QDialog.Accepted:
            values = dlg.values()
            name, day = values.pop("name"), values.pop("date")
            self._data.add_milestone(project_id=self._project_id, name=name, date=day, **values)

    def _edit_milestone(self, milestone_id: str) -> None:
        milestone = self._data.milestone(milestone_id)
        if milestone is None:
            return
        dlg = MilestoneEditorDialog(
            self, phases=self._data.phases_for_project(milestone.project_id), milestone=milestone
        )
        if dlg.exec() != QDialog.Accepted:
            return
        if dlg.delete_requested:
            self._data.delete_milestone(milestone_id)
        else:
            self._data.update_milestone(milestone_id, **dlg.values())

    # -------------------- misc --------------------

    def _on_error(self, message: str) -> None:
        QMessageBox.warning(self, "TaskFlow", message)

    def closeEvent(self, ev):
        settings = dict(self._ctx.settings)
        settings["main_window"] = main_window_state(self)
        gantt = dict(settings.get("gantt", {}))
        gantt["zoom"] = self._ctx.gantt.zoom
        gantt["group_by"] = self._ctx.gantt.group_mode
        settings["gantt"] = gantt
        try:
            save_settings(settings)
        except OSError as exc:
            log.warning("Could not save settings: %s", exc)
        super().closeEvent(ev)

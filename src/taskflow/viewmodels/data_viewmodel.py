# Rev 1.0.0
"""In-memory cache of every TaskFlow collection, backed by the SQLite repositories.

Mutations are pessimistic: the repository call runs first and the cache only
changes once it has returned. Then the collection signal and ``changed`` fire,
so every collection is current by the time a mutation returns. A failed call
leaves the cache untouched, is logged, and is reported through ``errorRaised``.
"""
from __future__ import annotations

import sqlite3
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from PySide6.QtCore import QObject, Signal

from taskflow.errors import TaskFlowError
from taskflow.models.entities import CustomColumn, Milestone, Person, Phase, Project, Task
from taskflow.utils.logging_setup import get_logger

log = get_logger(__name__)

T = TypeVar("T")

# Failures a mutation reports instead of raising
_PERSISTENCE_ERRORS = (TaskFlowError, sqlite3.Error, ValueError)


class DataViewModel(QObject):
    changed = Signal()
    projectsChanged = Signal()
    peopleChanged = Signal()
    phasesChanged = Signal()
    tasksChanged = Signal()
    milestonesChanged = Signal()
    customColumnsChanged = Signal()
    errorRaised = Signal(str)

    def __init__(
        self,
        *,
        projects_repo,
        people_repo,
        phases_repo,
        tasks_repo,
        milestones_repo,
        custom_columns_repo,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._repos = {
            "projects": projects_repo,
            "people": people_repo,
            "phases": phases_repo,
            "tasks": tasks_repo,
            "milestones": milestones_repo,
            "custom_columns": custom_columns_repo,
        }
        self._projects: List[Project] = []
        self._people: List[Person] = []
        self._phases: List[Phase] = []
        self._tasks: List[Task] = []
        self._milestones: List[Milestone] = []
        self._custom_columns: List[CustomColumn] = []

    # ---- loading
    def _fetch(self, name: str) -> list:
        repo = self._repos[name]
        if name == "projects":
            return repo.list_projects()
        if name == "people":
            return repo.list_people()
        if name == "phases":
            return repo.list_phases()
        if name == "tasks":
            return repo.list_tasks()
        if name == "milestones":
            return repo.list_milestones()
        return repo.list_custom_columns()

    def reload(self, *names: str) -> bool:
        """Refetch the named collections (all when none given)."""
        names = names or tuple(self._repos)
        try:
            fresh = {n: self._fetch(n) for n in names}
        except _PERSISTENCE_ERRORS as exc:
            self._fail("load data", exc)
            return False
        for n, items in fresh.items():
            setattr(self, f"_{n}", items)
        log.debug("Reloaded %s", ", ".join(names))
        self._emit(*names)
        return True

    # ---- collections
    @property
    def projects(self) -> List[Project]:
        return list(self._projects)

    @property
    def people(self) -> List[Person]:
        return list(self._people)

    @property
    def phases(self) -> List[Phase]:
        return list(self._phases)

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    @property
    def milestones(self) -> List[Milestone]:
        return list(self._milestones)

    @property
    def custom_columns(self) -> List[CustomColumn]:
        return list(self._custom_columns)

    def active_people(self) -> List[Person]:
        return [p for p in self._people if p.active]

    def tasks_for_project(self, project_id: str) -> List[Task]:
        return [t for t in self._tasks if t.project_id == project_id]

    def phases_for_project(self, project_id: str) -> List[Phase]:
        return sorted((p for p in self._phases if p.project_id == project_id), key=lambda p: p.order)

    def milestones_for_project(self, project_id: str) -> List[Milestone]:
        return [m for m in self._milestones if m.project_id == project_id]

    def custom_columns_for_project(self, project_id: str, active_only: bool = True) -> List[CustomColumn]:
        cols = [c for c in self._custom_columns if c.project_id == project_id and (c.active or not active_only)]
        return sorted(cols, key=lambda c: c.order)

    def project(self, project_id: str) -> Optional[Project]:
        return _find(self._projects, project_id)

    def person(self, person_id: str) -> Optional[Person]:
        return _find(self._people, person_id)

    def phase(self, phase_id: str) -> Optional[Phase]:
        return _find(self._phases, phase_id)

    def task(self, task_id: str) -> Optional[Task]:
        return _find(self._tasks, task_id)

    def milestone(self, milestone_id: str) -> Optional[Milestone]:
        return _find(self._milestones, milestone_id)

    # ---- tasks
    def add_task(self, *, project_id: str, name: str, **fields: Any) -> Optional[Task]:
        task = self._call("create task", lambda: self._repos["tasks"].create_task(project_id=project_id, name=name, **fields))
        if task is not None:
            self._tasks.append(task)
            self._emit("tasks")
        return task

    def update_task(self, task_id: str, **fields: Any) -> Optional[Task]:
        task = self._call("update task", lambda: self._repos["tasks"].update_task(task_id, **fields))
        if task is not None:
            self._tasks = _replaced(self._tasks, task)
            self._emit("tasks")
        return task

    def delete_task(self, task_id: str) -> bool:
        if self._call("delete task", lambda: self._repos["tasks"].delete_task(task_id) or True) is None:
            return False
        self._tasks = [t for t in self._tasks if t.id != task_id]
        self._emit("tasks")
        return True

    # ---- milestones
    def add_milestone(self, *, project_id: str, name: str, date, **fields: Any) -> Optional[Milestone]:
        milestone = self._call(
            "create milestone",
            lambda: self._repos["milestones"].create_milestone(project_id=project_id, name=name, date=date, **fields),
        )
        if milestone is not None:
            self._milestones.append(milestone)
            self._emit("milestones")
        return milestone

    def update_milestone(self, milestone_id: str, **fields: Any) -> Optional[Milestone]:
        milestone = self._call(
            "update milestone", lambda: self._repos["milestones"].update_milestone(milestone_id, **fields)
        )
        if milestone is not None:
            self._milestones = _replaced(self._milestones, milestone)
            self._emit("milestones")
        return milestone

    def delete_milestone(self, milestone_id: str) -> bool:
        if self._call("delete milestone", lambda: self._repos["milestones"].delete_milestone(milestone_id) or True) is None:
            return False
        self._milestones = [m for m in self._milestones if m.id != milestone_id]
        self._emit("milestones")
        return True

    # ---- phases
    def add_phase(self, *, project_id: str, name: str, **fields: Any) -> Optional[Phase]:
        phase = self._call(
            "create phase", lambda: self._repos["phases"].create_phase(project_id=project_id, name=name, **fields)
        )
        if phase is not None:
            self._phases.append(phase)
            self._emit("phases")
        return phase

    def update_phase(self, phase_id: str, **fields: Any) -> Optional[Phase]:
        phase = self._call("update phase", lambda: self._repos["phases"].update_phase(phase_id, **fields))
        if phase is not None:
            self._phases = _replaced(self._phases, phase)
            self._emit("phases")
        return phase

    def delete_phase(self, phase_id: str) -> bool:
        if self._call("delete phase", lambda: self._repos["phases"].delete_phase(phase_id) or True) is None:
            return False
        # tasks and milestones had their phase_id nulled by the store
        return self.reload("phases", "tasks", "milestones")

    # ---- projects
    def add_project(self, *, name: str, **fields: Any) -> Optional[Project]:
        project = self._call("create project", lambda: self._repos["projects"].create_project(name=name, **fields))
        if project is not None:
            self._projects.append(project)
            self._emit("projects")
        return project

    def update_project(self, project_id: str, **fields: Any) -> Optional[Project]:
        project = self._call("update project", lambda: self._repos["projects"].update_project(project_id, **fields))
        if project is not None:
            self._projects = _replaced(self._projects, project)
            self._emit("projects")
        return project

    def delete_project(self, project_id: str) -> bool:
        if self._call("delete project", lambda: self._repos["projects"].delete_project(project_id) or True) is None:
            return False
        # cascade removed every dependent row
        self._projects = [p for p in self._projects if p.id != project_id]
        self._phases = [p for p in self._phases if p.project_id != project_id]
        self._tasks = [t for t in self._tasks if t.project_id != project_id]
        self._milestones = [m for m in self._milestones if m.project_id != project_id]
        self._custom_columns = [c for c in self._custom_columns if c.project_id != project_id]
        self._emit("projects", "phases", "tasks", "milestones", "custom_columns")
        return True

    # ---- people
    def add_person(self, *, name: str, **fields: Any) -> Optional[Person]:
        person = self._call("create person", lambda: self._repos["people"].create_person(name=name, **fields))
        if person is not None:
            self._people.append(person)
            self._emit("people")
        return person

    def update_person(self, person_id: str, **fields: Any) -> Optional[Person]:
        person = self._call("update person", lambda: self._repos["people"].update_person(person_id, **fields))
        if person is not None:
            self._people = _replaced(self._people, person)
            self._emit("people")
        return person

    def delete_person(self, person_id: str) -> bool:
        if self._call("delete person", lambda: self._repos["people"].delete_person(person_id) or True) is None:
            return False
        # their tasks are now unassigned
        return self.reload("people", "tasks")

    # ---- custom columns
    def add_custom_column(self, *, project_id: str, name: str, **fields: Any) -> Optional[CustomColumn]:
        column = self._call(
            "create column",
            lambda: self._repos["custom_columns"].create_custom_column(project_id=project_id, name=name, **fields),
        )
        if column is not None:
            self._custom_columns.append(column)
            self._emit("custom_columns")
        return column

    def update_custom_column(self, column_id: str, **fields: Any) -> Optional[CustomColumn]:
        column = self._call(
            "update column", lambda: self._repos["custom_columns"].update_custom_column(column_id, **fields)
        )
        if column is not None:
            self._custom_columns = _replaced(self._custom_columns, column)
            self._emit("custom_columns")
        return column

    def delete_custom_column(self, column_id: str) -> bool:
        if self._call("delete column", lambda: self._repos["custom_columns"].delete_custom_column(column_id) or True) is None:
            return False
        self._custom_columns = [c for c in self._custom_columns if c.id != column_id]
        self._emit("custom_columns")
        return True

    def reorder_custom_columns(self, project_id: str, ordered_ids: Iterable[str]) -> bool:
        """Persist a new display order; ids are renumbered 0..n-1 in the given sequence."""
        repo = self._repos["custom_columns"]

        def write() -> bool:
            for index, column_id in enumerate(ordered_ids):
                repo.update_custom_column(column_id, order=index)
            return True

        if self._call("reorder columns", write) is None:
            # a partial write may have landed; show what the store holds
            self.reload("custom_columns")
            return False
        return self.reload("custom_columns")

    # ---- internals
    def _call(self, what: str, fn: Callable[[], T]) -> Optional[T]:
        try:
            return fn()
        except _PERSISTENCE_ERRORS as exc:
            self._fail(what, exc)
            return None

    def _fail(self, what: str, exc: Exception) -> None:
        log.warning("Could not %s: %s", what, exc, exc_info=not isinstance(exc, TaskFlowError))
        self.errorRaised.emit(f"Could not {what}: {exc}")

    def _emit(self, *names: str) -> None:
        signals: Dict[str, Any] = {
            "projects": self.projectsChanged,
            "people": self.peopleChanged,
            "phases": self.phasesChanged,
            "tasks": self.tasksChanged,
            "milestones": self.milestonesChanged,
            "custom_columns": self.customColumnsChanged,
        }
        for n in names:
            signals[n].emit()
        self.changed.emit()


def _find(items: List[T], entity_id: str) -> Optional[T]:
    for item in items:
        if item.id == entity_id:
            return item
    return None


def _replaced(items: List[T], updated: T) -> List[T]:
    return [updated if item.id == updated.id else item for item in items]

# Rev 1.0.0
from __future__ import annotations

from typing import Any, List, Optional

from taskflow.errors import EntityNotFound
from taskflow.models.entities import Task

from ._sqlite import SQLiteRepository, ensure_phase_in_project
from .mappers import row_to_task, utc_now


class SQLiteTaskRepository(SQLiteRepository):
    """
    Task CRUD + per-project listing.
    - custom_values persist as JSON text keyed by custom column id
    - every create/update stamps updated_at (UTC)
    - phase_id must point at a phase of the task's own project
    """

    _table = "tasks"
    _kind = "task"
    _columns = {
        "project_id": "project_id",
        "name": "name",
        "description": "description",
        "phase_id": "phase_id",
        "responsible_id": "responsible_id",
        "start_date": "start_date",
        "end_date": "end_date",
        "sprint_date": "sprint_date",
        "status": "status",
        "priority": "priority",
        "quantity": "quantity",
        "collected": "collected",
        "observation": "observation",
        "custom_values": "custom_values",
        "updated_at": "updated_at",
    }

    def list_tasks(self, project_id: Optional[str] = None) -> List[Task]:
        if project_id is None:
            rows = self._fetch_all("SELECT * FROM tasks ORDER BY created_at, rowid")
        else:
            rows = self._fetch_all(
                "SELECT * FROM tasks WHERE project_id = ? ORDER BY created_at, rowid", (project_id,)
            )
        return [row_to_task(r) for r in rows]

    def get_task(self, task_id: str) -> Optional[Task]:
        row = self._row(task_id)
        return row_to_task(row) if row else None

    def create_task(self, *, project_id: str, name: str, **fields: Any) -> Task:
        ensure_phase_in_project(self._conn(), project_id, fields.get("phase_id"))
        fields.setdefault("custom_values", {})
        fields["updated_at"] = utc_now()
        task_id = self._insert({"project_id": project_id, "name": name, **fields})
        return self._require(task_id)

    def update_task(self, task_id: str, **fields: Any) -> Task:
        if "phase_id" in fields or "project_id" in fields:
            current = self._require(task_id)
            ensure_phase_in_project(
                self._conn(),
                fields.get("project_id", current.project_id),
                fields.get("phase_id", current.phase_id),
            )
        fields["updated_at"] = utc_now()
        self._update(task_id, fields)
        return self._require(task_id)

    def delete_task(self, task_id: str) -> None:
        self._delete(task_id)

    def _require(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        if task is None:
            raise EntityNotFound(self._kind, task_id)
        return task

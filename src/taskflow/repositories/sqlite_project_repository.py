# Rev 1.0.0
from __future__ import annotations

from typing import Any, List, Optional

from taskflow.errors import EntityNotFound
from taskflow.models.entities import Project

from ._sqlite import SQLiteRepository
from .mappers import row_to_project


class SQLiteProjectRepository(SQLiteRepository):
    """Project CRUD. Deleting a project cascades to its phases, tasks, milestones and columns."""

    _table = "projects"
    _kind = "project"
    _columns = {
        "name": "name",
        "description": "description",
        "status": "status",
        "start_date": "start_date",
        "end_date": "end_date",
        "visible_fields": "visible_fields",
    }

    def list_projects(self) -> List[Project]:
        rows = self._fetch_all("SELECT * FROM projects ORDER BY created_at, name")
        return [row_to_project(r) for r in rows]

    def get_project(self, project_id: str) -> Optional[Project]:
        row = self._row(project_id)
        return row_to_project(row) if row else None

    def create_project(self, *, name: str, **fields: Any) -> Project:
        project_id = self._insert({"name": name, **fields})
        return self._require(project_id)

    def update_project(self, project_id: str, **fields: Any) -> Project:
        self._update(project_id, fields)
        return self._require(project_id)

    def delete_project(self, project_id: str) -> None:
        self._delete(project_id)

    def _require(self, project_id: str) -> Project:
        project = self.get_project(project_id)
        if project is None:
            raise EntityNotFound(self._kind, project_id)
        return project

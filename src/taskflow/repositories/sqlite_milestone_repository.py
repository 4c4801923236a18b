# Rev 1.0.0
from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

from taskflow.errors import EntityNotFound
from taskflow.models.entities import Milestone

from ._sqlite import SQLiteRepository, ensure_phase_in_project
from .mappers import row_to_milestone


class SQLiteMilestoneRepository(SQLiteRepository):
    """Milestones list by date; an optional phase_id pins the flag to a phase row."""

    _table = "milestones"
    _kind = "milestone"
    _columns = {
        "project_id": "project_id",
        "name": "name",
        "date": "date",
        "end_date": "end_date",
        "completed": "completed",
        "color": "color",
        "description": "description",
        "phase_id": "phase_id",
    }

    def list_milestones(self, project_id: Optional[str] = None) -> List[Milestone]:
        if project_id is None:
            rows = self._fetch_all("SELECT * FROM milestones ORDER BY date, name")
        else:
            rows = self._fetch_all(
                "SELECT * FROM milestones WHERE project_id = ? ORDER BY date, name", (project_id,)
            )
        return [row_to_milestone(r) for r in rows]

    def get_milestone(self, milestone_id: str) -> Optional[Milestone]:
        row = self._row(milestone_id)
        return row_to_milestone(row) if row else None

    def create_milestone(self, *, project_id: str, name: str, date: date, **fields: Any) -> Milestone:
        ensure_phase_in_project(self._conn(), project_id, fields.get("phase_id"))
        milestone_id = self._insert({"project_id": project_id, "name": name, "date": date, **fields})
        return self._require(milestone_id)

    def update_milestone(self, milestone_id: str, **fields: Any) -> Milestone:
        if "phase_id" in fields or "project_id" in fields:
            current = self._require(milestone_id)
            ensure_phase_in_project(
                self._conn(),
                fields.get("project_id", current.project_id),
                fields.get("phase_id", current.phase_id),
            )
        self._update(milestone_id, fields)
        return self._require(milestone_id)

    def delete_milestone(self, milestone_id: str) -> None:
        self._delete(milestone_id)

    def _require(self, milestone_id: str) -> Milestone:
        milestone = self.get_milestone(milestone_id)
        if milestone is None:
            raise EntityNotFound(self._kind, milestone_id)
        return milestone

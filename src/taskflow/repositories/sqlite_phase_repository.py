# Rev 1.0.0
from __future__ import annotations

from typing import Any, List, Optional

from taskflow.errors import EntityNotFound
from taskflow.models.entities import Phase

from ._sqlite import SQLiteRepository
from .mappers import row_to_phase


class SQLitePhaseRepository(SQLiteRepository):
    """
    Thin wrapper around the 'phases' table.
    Phases list in display order (sort_order, then name) within each project.
    """

    _table = "phases"
    _kind = "phase"
    _columns = {
        "project_id": "project_id",
        "name": "name",
        "order": "sort_order",
        "color": "color",
        "start_date": "start_date",
        "end_date": "end_date",
        "description": "description",
    }

    def list_phases(self, project_id: Optional[str] = None) -> List[Phase]:
        if project_id is None:
            rows = self._fetch_all("SELECT * FROM phases ORDER BY project_id, sort_order, name")
        else:
            rows = self._fetch_all(
                "SELECT * FROM phases WHERE project_id = ? ORDER BY sort_order, name", (project_id,)
            )
        return [row_to_phase(r) for r in rows]

    def get_phase(self, phase_id: str) -> Optional[Phase]:
        row = self._row(phase_id)
        return row_to_phase(row) if row else None

    def create_phase(self, *, project_id: str, name: str, **fields: Any) -> Phase:
        if "order" not in fields:
            fields["order"] = self._next_order(project_id)
        phase_id = self._insert({"project_id": project_id, "name": name, **fields})
        return self._require(phase_id)

    def update_phase(self, phase_id: str, **fields: Any) -> Phase:
        self._update(phase_id, fields)
        return self._require(phase_id)

    def delete_phase(self, phase_id: str) -> None:
        # tasks/milestones keep living; their phase_id is nulled by the FK
        self._delete(phase_id)

    def _next_order(self, project_id: str) -> int:
        row = self._fetch_one(
            "SELECT COALESCE(MAX(sort_order), -1) + 1 AS n FROM phases WHERE project_id = ?", (project_id,)
        )
        return int(row["n"]) if row else 0

    def _require(self, phase_id: str) -> Phase:
        phase = self.get_phase(phase_id)
        if phase is None:
            raise EntityNotFound(self._kind, phase_id)
        return phase

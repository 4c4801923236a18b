# Rev 1.0.0
from __future__ import annotations

from typing import Any, List, Optional

from taskflow.errors import EntityNotFound
from taskflow.models.entities import CustomColumn

from ._sqlite import SQLiteRepository
from .mappers import row_to_custom_column


class SQLiteCustomColumnRepository(SQLiteRepository):
    _table = "custom_columns"
    _kind = "custom column"
    _columns = {
        "project_id": "project_id",
        "name": "name",
        "type": "type",
        "order": "sort_order",
        "options": "options",
        "is_milestone": "is_milestone",
        "active": "active",
        "standard_field": "standard_field",
    }

    def list_custom_columns(self, project_id: Optional[str] = None) -> List[CustomColumn]:
        if project_id is None:
            rows = self._fetch_all("SELECT * FROM custom_columns ORDER BY project_id, sort_order, name")
        else:
            rows = self._fetch_all(
                "SELECT * FROM custom_columns WHERE project_id = ? ORDER BY sort_order, name", (project_id,)
            )
        return [row_to_custom_column(r) for r in rows]

    def get_custom_column(self, column_id: str) -> Optional[CustomColumn]:
        row = self._row(column_id)
        return row_to_custom_column(row) if row else None

    def create_custom_column(self, *, project_id: str, name: str, type: str = "text", **fields: Any) -> CustomColumn:
        column_id = self._insert({"project_id": project_id, "name": name, "type": type, **fields})
        return self._require(column_id)

    def update_custom_column(self, column_id: str, **fields: Any) -> CustomColumn:
        self._update(column_id, fields)
        return self._require(column_id)

    def delete_custom_column(self, column_id: str) -> None:
        self._delete(column_id)

    def _require(self, column_id: str) -> CustomColumn:
        column = self.get_custom_column(column_id)
        if column is None:
            raise EntityNotFound(self._kind, column_id)
        return column

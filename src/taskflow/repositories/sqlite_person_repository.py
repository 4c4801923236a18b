# Rev 1.0.0
from __future__ import annotations

from typing import Any, List, Optional

from taskflow.errors import EntityNotFound
from taskflow.models.entities import Person

from ._sqlite import SQLiteRepository
from .mappers import row_to_person


class SQLitePersonRepository(SQLiteRepository):
    """People are global; deleting one leaves their tasks unassigned."""

    _table = "people"
    _kind = "person"
    _columns = {
        "name": "name",
        "email": "email",
        "type": "type",
        "color": "color",
        "active": "active",
        "avatar_url": "avatar_url",
    }

    def list_people(self, active_only: bool = False) -> List[Person]:
        sql = "SELECT * FROM people"
        if active_only:
            sql += " WHERE active = 1"
        rows = self._fetch_all(sql + " ORDER BY name COLLATE NOCASE")
        return [row_to_person(r) for r in rows]

    def get_person(self, person_id: str) -> Optional[Person]:
        row = self._row(person_id)
        return row_to_person(row) if row else None

    def create_person(self, *, name: str, **fields: Any) -> Person:
        person_id = self._insert({"name": name, **fields})
        return self._require(person_id)

    def update_person(self, person_id: str, **fields: Any) -> Person:
        self._update(person_id, fields)
        return self._require(person_id)

    def delete_person(self, person_id: str) -> None:
        self._delete(person_id)

    def _require(self, person_id: str) -> Person:
        person = self.get_person(person_id)
        if person is None:
            raise EntityNotFound(self._kind, person_id)
        return person

# Rev 1.0.0
"""Shared plumbing for the per-entity SQLite repositories."""
from __future__ import annotations

import sqlite3
import uuid
from typing import Any, Dict, List, Mapping, Optional, Union

from taskflow.errors import EntityNotFound, IntegrityViolation
from taskflow.utils.logging_setup import get_logger

from .mappers import encode

log = get_logger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


class SQLiteRepository:
    """
    Base for repositories over one table.

    Subclasses set:
      _table    table name
      _kind     entity name used in errors/logs
      _columns  entity attribute -> column name, for every writable attribute
    """

    _table: str = ""
    _kind: str = ""
    _columns: Dict[str, str] = {}

    def __init__(self, db_or_conn: Union[sqlite3.Connection, Any]):
        self._db_or_conn = db_or_conn

    # -------------------------
    # Connection handling
    # -------------------------
    def _conn(self) -> sqlite3.Connection:
        if isinstance(self._db_or_conn, sqlite3.Connection):
            return self._db_or_conn
        if hasattr(self._db_or_conn, "conn") and isinstance(self._db_or_conn.conn, sqlite3.Connection):
            return self._db_or_conn.conn
        raise RuntimeError(
            f"{type(self).__name__}: could not obtain sqlite3.Connection "
            "(expected .conn on wrapper, or a raw Connection)."
        )

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        con = self._conn()
        con.row_factory = sqlite3.Row
        return con.execute(sql, params).fetchall()

    def _fetch_one(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        rows = self._fetch_all(sql, params)
        return rows[0] if rows else None

    def _row(self, entity_id: str) -> Optional[sqlite3.Row]:
        return self._fetch_one(f"SELECT * FROM {self._table} WHERE id = ?", (entity_id,))

    # -------------------------
    # Writes
    # -------------------------
    def _columns_for(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        unknown = sorted(set(fields) - set(self._columns))
        if unknown:
            raise ValueError(f"Unknown {self._kind} field(s): {', '.join(unknown)}")
        return {self._columns[k]: encode(v) for k, v in fields.items()}

    def _insert(self, fields: Mapping[str, Any]) -> str:
        entity_id = fields.get("id") or new_id()
        values = self._columns_for({k: v for k, v in fields.items() if k != "id"})
        values["id"] = entity_id
        cols = ", ".join(values)
        marks = ", ".join("?" for _ in values)
        con = self._conn()
        con.execute(f"INSERT INTO {self._table}({cols}) VALUES ({marks})", tuple(values.values()))
        con.commit()
        log.debug("Created %s %s", self._kind, entity_id)
        return entity_id

    def _update(self, entity_id: str, fields: Mapping[str, Any]) -> None:
        values = self._columns_for(fields)
        con = self._conn()
        if not values:
            if self._row(entity_id) is None:
                raise EntityNotFound(self._kind, entity_id)
            return
        sets = ", ".join(f"{c} = ?" for c in values)
        cur = con.execute(
            f"UPDATE {self._table} SET {sets} WHERE id = ?",
            (*values.values(), entity_id),
        )
        con.commit()
        if cur.rowcount == 0:
            raise EntityNotFound(self._kind, entity_id)
        log.debug("Updated %s %s: %s", self._kind, entity_id, sorted(fields))

    def _delete(self, entity_id: str) -> None:
        con = self._conn()
        cur = con.execute(f"DELETE FROM {self._table} WHERE id = ?", (entity_id,))
        con.commit()
        if cur.rowcount == 0:
            raise EntityNotFound(self._kind, entity_id)
        log.debug("Deleted %s %s", self._kind, entity_id)


def ensure_phase_in_project(con: sqlite3.Connection, project_id: str, phase_id: Optional[str]) -> None:
    """A referenced phase must exist and belong to the same project."""
    if not phase_id:
        return
    row = con.execute("SELECT project_id FROM phases WHERE id = ?", (phase_id,)).fetchone()
    if row is None:
        raise IntegrityViolation(f"phase '{phase_id}' does not exist")
    if row[0] != project_id:
        raise IntegrityViolation(f"phase '{phase_id}' belongs to project '{row[0]}', not '{project_id}'")

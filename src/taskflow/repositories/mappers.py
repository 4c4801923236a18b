# Rev 1.0.0
"""Row <-> entity conversion for the SQLite repositories.

Dates are stored as ISO text. A value that does not parse is logged and read
back as ``None`` so the item is simply not drawn on the timeline.
"""
from __future__ import annotations

import json
import sqlite3
from datetime import date, datetime, timezone
from typing import Any, Optional

from taskflow.models.entities import CustomColumn, Milestone, Person, Phase, Project, Task
from taskflow.utils.logging_setup import get_logger

log = get_logger(__name__)


def parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        # Accept both 'YYYY-MM-DD' and full timestamps
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        log.warning("Unparseable date %r; treating as empty", value)
        return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        log.warning("Unparseable timestamp %r; treating as empty", value)
        return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def encode(value: Any) -> Any:
    """Python value -> SQLite parameter."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value)
    return value


def _json(value: Any, fallback: Any) -> Any:
    if value is None or value == "":
        return fallback
    try:
        result = json.loads(value)
    except ValueError:
        log.warning("Unparseable JSON column %r; using default", value)
        return fallback
    if not isinstance(result, type(fallback)):
        log.warning("JSON column %r is not a %s; using default", value, type(fallback).__name__)
        return fallback
    return result


def row_to_project(row: sqlite3.Row) -> Project:
    return Project(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        status=row["status"],
        start_date=parse_date(row["start_date"]),
        end_date=parse_date(row["end_date"]),
        visible_fields=list(_json(row["visible_fields"], [])),
    )


def row_to_phase(row: sqlite3.Row) -> Phase:
    return Phase(
        id=row["id"],
        project_id=row["project_id"],
        name=row["name"],
        order=int(row["sort_order"] or 0),
        color=row["color"],
        start_date=parse_date(row["start_date"]),
        end_date=parse_date(row["end_date"]),
        description=row["description"],
    )


def row_to_person(row: sqlite3.Row) -> Person:
    return Person(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        type=row["type"],
        color=row["color"],
        active=bool(row["active"]),
        avatar_url=row["avatar_url"],
    )


def row_to_task(row: sqlite3.Row) -> Task:
    return Task(
        id=row["id"],
        project_id=row["project_id"],
        name=row["name"],
        description=row["description"],
        phase_id=row["phase_id"],
        responsible_id=row["responsible_id"],
        start_date=parse_date(row["start_date"]),
        end_date=parse_date(row["end_date"]),
        sprint_date=parse_date(row["sprint_date"]),
        status=row["status"],
        priority=row["priority"],
        quantity=row["quantity"],
        collected=row["collected"],
        observation=row["observation"],
        custom_values=dict(_json(row["custom_values"], {})),
        updated_at=parse_timestamp(row["updated_at"]),
    )


def row_to_milestone(row: sqlite3.Row) -> Milestone:
    return Milestone(
        id=row["id"],
        project_id=row["project_id"],
        name=row["name"],
        # NOT NULL in the schema, but may still hold garbage text
        date=parse_date(row["date"]),
        end_date=parse_date(row["end_date"]),
        completed=bool(row["completed"]),
        color=row["color"],
        description=row["description"],
        phase_id=row["phase_id"],
    )


def row_to_custom_column(row: sqlite3.Row) -> CustomColumn:
    return CustomColumn(
        id=row["id"],
        project_id=row["project_id"],
        name=row["name"],
        type=row["type"],
        order=int(row["sort_order"] or 0),
        options=list(_json(row["options"], [])),
        is_milestone=bool(row["is_milestone"]),
        active=bool(row["active"]),
        standard_field=row["standard_field"],
    )

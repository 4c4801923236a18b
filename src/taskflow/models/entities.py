# Rev 0.2.0
"""Plain records for the TaskFlow schema. Relations are held by string id."""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from .types import (
    ColumnType,
    DEFAULT_VISIBLE_FIELDS,
    PersonType,
    ProjectStatus,
    StandardField,
    TaskPriority,
    TaskStatus,
)


@dataclass
class Project:
    id: str
    name: str
    description: Optional[str] = None
    status: ProjectStatus = "planning"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    visible_fields: list[str] = field(default_factory=lambda: list(DEFAULT_VISIBLE_FIELDS))


@dataclass
class Phase:
    id: str
    project_id: str
    name: str
    order: int = 0
    color: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None


@dataclass
class Person:
    id: str
    name: str
    email: Optional[str] = None
    type: PersonType = "internal"
    color: str = "#3B82F6"
    active: bool = True
    avatar_url: Optional[str] = None


@dataclass
class Task:
    id: str
    project_id: str
    name: str
    description: Optional[str] = None
    phase_id: Optional[str] = None
    responsible_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sprint_date: Optional[date] = None
    status: TaskStatus = "pending"
    priority: TaskPriority = "medium"
    quantity: Optional[int] = None
    collected: Optional[int] = None
    observation: Optional[str] = None
    custom_values: dict[str, Any] = field(default_factory=dict)
    updated_at: Optional[datetime] = None


@dataclass
class Milestone:
    """A dated checkpoint; `end_date` turns it into a start/end pair."""

    id: str
    project_id: str
    name: str
    date: date
    end_date: Optional[date] = None
    completed: bool = False
    color: str = "#EAB308"
    description: Optional[str] = None
    phase_id: Optional[str] = None


@dataclass
class CustomColumn:
    id: str
    project_id: str
    name: str
    type: ColumnType = "text"
    order: int = 0
    options: list[str] = field(default_factory=list)
    is_milestone: bool = False
    active: bool = True
    standard_field: Optional[StandardField] = None

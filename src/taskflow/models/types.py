# TaskFlow type definitions
# Rev 0.2.0

from __future__ import annotations
from typing import Literal

ProjectStatus = Literal["planning", "active", "paused", "completed", "cancelled"]
TaskStatus = Literal["pending", "in_progress", "blocked", "completed", "cancelled"]
TaskPriority = Literal["low", "medium", "high", "urgent"]
PersonType = Literal["internal", "partner"]
ColumnType = Literal["text", "number", "date", "list", "percentage", "user"]
StandardField = Literal[
    "name", "description", "responsible", "status", "priority", "startDate", "endDate", "progress"
]

# Timeline granularity and row organisation
ZoomLevel = Literal["day", "week", "month"]
GroupMode = Literal["responsible", "phase", "status", "project"]

TASK_STATUSES: tuple[TaskStatus, ...] = ("pending", "in_progress", "blocked", "completed", "cancelled")
TASK_PRIORITIES: tuple[TaskPriority, ...] = ("low", "medium", "high", "urgent")
PROJECT_STATUSES: tuple[ProjectStatus, ...] = ("planning", "active", "paused", "completed", "cancelled")
COLUMN_TYPES: tuple[ColumnType, ...] = ("text", "number", "date", "list", "percentage", "user")
ZOOM_LEVELS: tuple[ZoomLevel, ...] = ("day", "week", "month")
GROUP_MODES: tuple[GroupMode, ...] = ("phase", "responsible", "status", "project")

# Statuses that never count as late
CLOSED_STATUSES = frozenset({"completed", "cancelled"})

STATUS_LABELS: dict[str, str] = {
    "pending": "Pending",
    "in_progress": "In Progress",
    "blocked": "Blocked",
    "completed": "Completed",
    "cancelled": "Cancelled",
}

STATUS_COLORS: dict[str, str] = {
    "pending": "#EAB308",
    "in_progress": "#3B82F6",
    "blocked": "#EF4444",
    "completed": "#22C55E",
    "cancelled": "#6B7280",
}

PRIORITY_LABELS: dict[str, str] = {
    "low": "Low",
    "medium": "Medium",
    "high": "High",
    "urgent": "Urgent",
}

PROJECT_STATUS_LABELS: dict[str, str] = {
    "planning": "Planning",
    "active": "Active",
    "paused": "Paused",
    "completed": "Completed",
    "cancelled": "Cancelled",
}

PERSON_TYPE_LABELS: dict[str, str] = {
    "internal": "Internal",
    "partner": "Partner",
}

GROUP_MODE_LABELS: dict[str, str] = {
    "phase": "Phase",
    "responsible": "Responsible",
    "status": "Status",
    "project": "Project",
}

DEFAULT_VISIBLE_FIELDS: tuple[str, ...] = (
    "description", "phase", "responsible", "startDate", "endDate", "priority",
)

# src/taskflow/services/task_status.py
from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Optional

from taskflow.models.entities import Task
from taskflow.models.types import CLOSED_STATUSES

DUE_SOON_DAYS = 3

# Progress shown for open tasks without a quantity/collected pair
_STATUS_PROGRESS = {"in_progress": 50, "blocked": 25}


def is_overdue(task: Task, today: Optional[date] = None) -> bool:
    """End date in the past while the task is still open."""
    if task.end_date is None or task.status in CLOSED_STATUSES:
        return False
    return task.end_date < (today or date.today())


def is_due_soon(task: Task, today: Optional[date] = None, days: int = DUE_SOON_DAYS) -> bool:
    if task.end_date is None or task.status in CLOSED_STATUSES:
        return False
    today = today or date.today()
    return today <= task.end_date <= today + timedelta(days=days)


def progress_percent(task: Task) -> int:
    if task.status == "completed":
        return 100
    if task.status == "cancelled":
        return 0
    if task.quantity and task.quantity > 0:
        # half-up, not banker's rounding
        return int(math.floor((task.collected or 0) / task.quantity * 100 + 0.5))
    return _STATUS_PROGRESS.get(task.status, 0)


def bar_state(task: Task, today: Optional[date] = None) -> str:
    """Bucket used to colour a task bar; overdue wins over the status."""
    if is_overdue(task, today):
        return "overdue"
    return task.status

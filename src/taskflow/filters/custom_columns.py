# Rev 1.0.0
"""Filtering tasks by their custom-column values."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from taskflow.models.entities import CustomColumn, Task
from taskflow.utils.logging_setup import get_logger

log = get_logger(__name__)

Bound = Union[float, int, str, None]


@dataclass
class CustomFilter:
    """
    One column's filter.

    text      -> 'text' columns, case-insensitive contains
    selected  -> 'list' / 'user' columns, membership
    min, max  -> 'number' / 'percentage' (numeric) and 'date' (ISO text) ranges
    """

    text: str = ""
    selected: list[str] = field(default_factory=list)
    min: Bound = None
    max: Bound = None

    @property
    def has_range(self) -> bool:
        return _set(self.min) or _set(self.max)

    @property
    def active(self) -> bool:
        return bool(self.text) or bool(self.selected) or self.has_range


def _set(bound: Bound) -> bool:
    return bound is not None and bound != ""


def _empty(value: Any) -> bool:
    return value is None or value == ""


def _as_number(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _match_one(column: CustomColumn, value: Any, flt: CustomFilter) -> bool:
    if column.type == "text":
        if not flt.text:
            return True
        return flt.text.lower() in ("" if value is None else str(value)).lower()

    if column.type in ("list", "user"):
        if not flt.selected:
            return True
        return ("" if value is None else str(value)) in flt.selected

    if column.type in ("number", "percentage"):
        if _empty(value):
            return not flt.has_range
        number = _as_number(value)
        if number is None:
            log.debug("Non-numeric value %r in column %s", value, column.id)
            return not flt.has_range
        lo, hi = _as_number(flt.min), _as_number(flt.max)
        if _set(flt.min) and lo is not None and number < lo:
            return False
        if _set(flt.max) and hi is not None and number > hi:
            return False
        return True

    if column.type == "date":
        if _empty(value):
            return not flt.has_range
        # ISO dates compare correctly as text
        text = str(value)
        if _set(flt.min) and text < str(flt.min):
            return False
        if _set(flt.max) and text > str(flt.max):
            return False
        return True

    return True


def matches_custom_filters(
    task: Task,
    filters: Mapping[str, CustomFilter],
    columns: Sequence[CustomColumn],
) -> bool:
    """True when the task passes every active filter. Filters on unknown columns are ignored."""
    by_id = {c.id: c for c in columns}
    for column_id, flt in filters.items():
        column = by_id.get(column_id)
        if column is None or not flt.active:
            continue
        if not _match_one(column, task.custom_values.get(column_id), flt):
            return False
    return True


def count_active_filters(filters: Mapping[str, CustomFilter]) -> int:
    return sum(1 for f in filters.values() if f.active)

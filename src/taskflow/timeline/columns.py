# Rev 1.0.0
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from taskflow.models.types import ZoomLevel

from .window import DateWindow

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Minimum rendered width of one column, per zoom
COLUMN_WIDTH_PX: dict[str, int] = {"day": 40, "week": 100, "month": 120}


@dataclass(frozen=True)
class Column:
    date: date
    label: str
    sub_label: Optional[str] = None


def column_width_px(zoom: ZoomLevel) -> int:
    try:
        return COLUMN_WIDTH_PX[zoom]
    except KeyError:
        raise ValueError(f"Unknown zoom level: {zoom!r}") from None


def _next_month_first(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def generate_columns(window: DateWindow, zoom: ZoomLevel) -> list[Column]:
    """
    One column per step from the window start while the column date <= window end.

    day   -> 'DD', month abbreviation as sub-label on the 1st
    week  -> 'DD/MM'
    month -> month abbreviation, 2-digit year as sub-label; columns after
             the first snap to the 1st of the month
    """
    column_width_px(zoom)
    cols: list[Column] = []
    current = window.start
    while current <= window.end:
        if zoom == "day":
            sub = MONTH_ABBR[current.month - 1] if current.day == 1 else None
            cols.append(Column(current, f"{current.day:02d}", sub))
            current += timedelta(days=1)
        elif zoom == "week":
            cols.append(Column(current, f"{current.day:02d}/{current.month:02d}"))
            current += timedelta(days=7)
        else:
            cols.append(Column(current, MONTH_ABBR[current.month - 1], f"{current.year % 100:02d}"))
            current = _next_month_first(current)
    return cols


def today_column_index(columns: Sequence[Column], today: date) -> Optional[int]:
    """Index of the column that contains `today`, for scroll-to-today."""
    if not columns or today < columns[0].date:
        return None
    index = None
    for i, col in enumerate(columns):
        if col.date <= today:
            index = i
        else:
            break
    return index

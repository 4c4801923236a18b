# Rev 1.0.0
"""Visible date window for the timeline.

The window is the padded hull of every start/end date in view. All bar and
marker positions are percentages of its span.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from taskflow.models.entities import Milestone, Phase, Task

PAD_BEFORE_DAYS = 14
PAD_AFTER_DAYS = 21

# Tighter margins used by the single-project chart
COMPACT_PAD_BEFORE_DAYS = 7
COMPACT_PAD_AFTER_DAYS = 14


@dataclass(frozen=True)
class DateWindow:
    start: date
    end: date

    @property
    def span_days(self) -> int:
        return (self.end - self.start).days

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def _add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def default_window(today: date) -> DateWindow:
    """First of this month through the last day of the month after next."""
    start = today.replace(day=1)
    last_month = _add_months(start, 2)
    end = last_month.replace(day=calendar.monthrange(last_month.year, last_month.month)[1])
    return DateWindow(start, end)


def collect_dates(
    tasks: Iterable[Task],
    phases: Optional[Iterable[Phase]] = None,
    milestones: Optional[Iterable[Milestone]] = None,
) -> list[date]:
    dates: list[date] = []
    for t in tasks:
        dates.extend(d for d in (t.start_date, t.end_date) if d is not None)
    for p in phases or ():
        dates.extend(d for d in (p.start_date, p.end_date) if d is not None)
    for m in milestones or ():
        dates.extend(d for d in (m.date, m.end_date) if d is not None)
    return dates


def derive_window(
    tasks: Sequence[Task],
    phases: Optional[Sequence[Phase]] = None,
    milestones: Optional[Sequence[Milestone]] = None,
    *,
    today: Optional[date] = None,
    pad_before: int = PAD_BEFORE_DAYS,
    pad_after: int = PAD_AFTER_DAYS,
    include_today: bool = False,
) -> DateWindow:
    """
    Padded window over every non-null date of the inputs.

    With no dates at all the default three-month window is returned.
    `include_today` stretches the end so the today marker is always visible.
    """
    today = today or date.today()
    dates = collect_dates(tasks, phases, milestones)
    if not dates:
        return default_window(today)

    lo, hi = min(dates), max(dates)
    if include_today and today > hi:
        hi = today
    start = lo - timedelta(days=pad_before)
    end = hi + timedelta(days=pad_after)
    if end <= start:
        end = start + timedelta(days=1)
    return DateWindow(start, end)

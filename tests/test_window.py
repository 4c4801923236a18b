# Rev 1.0.0
from __future__ import annotations

from datetime import date, timedelta

from factories import d, make_milestone, make_phase, make_task
from taskflow.timeline.window import (
    COMPACT_PAD_AFTER_DAYS,
    COMPACT_PAD_BEFORE_DAYS,
    DateWindow,
    collect_dates,
    default_window,
    derive_window,
)


def test_two_tasks_get_default_padding():
    tasks = [
        make_task(start="2024-01-01", end="2024-01-10"),
        make_task(start="2024-02-01", end="2024-02-05"),
    ]
    w = derive_window(tasks, today=d("2024-01-15"))
    assert w.start <= d("2023-12-18")
    assert w.end >= d("2024-02-26")
    assert w == DateWindow(d("2023-12-18"), d("2024-02-26"))


def test_window_covers_every_task():
    tasks = [
        make_task(start="2024-03-05", end="2024-03-09"),
        make_task(start="2024-01-20"),
        make_task(end="2024-05-01"),
        make_task(start="2024-02-02", end="2024-02-28"),
    ]
    w = derive_window(tasks, today=d("2024-01-01"))
    for t in tasks:
        if t.start_date:
            assert w.start <= t.start_date
        if t.end_date:
            assert w.end >= t.end_date


def test_single_task_still_padded():
    w = derive_window([make_task(start="2024-06-10", end="2024-06-10")], today=d("2024-06-10"))
    assert w.start == d("2024-06-10") - timedelta(days=14)
    assert w.end == d("2024-06-10") + timedelta(days=21)


def test_no_dates_falls_back_to_default_window():
    w = derive_window([make_task(), make_task()], today=d("2024-11-20"))
    assert w == DateWindow(d("2024-11-01"), d("2025-01-31"))


def test_default_window_across_leap_february():
    assert default_window(d("2023-12-31")) == DateWindow(d("2023-12-01"), d("2024-02-29"))


def test_phases_and_milestones_widen_window():
    tasks = [make_task(start="2024-04-01", end="2024-04-10")]
    phases = [make_phase("ph1", "Design", start_date=d("2024-03-20"), end_date=d("2024-04-05"))]
    milestones = [make_milestone("m1", "Launch", "2024-05-01")]
    w = derive_window(
        tasks,
        phases,
        milestones,
        today=d("2024-04-01"),
        pad_before=COMPACT_PAD_BEFORE_DAYS,
        pad_after=COMPACT_PAD_AFTER_DAYS,
    )
    assert w == DateWindow(d("2024-03-13"), d("2024-05-15"))


def test_include_today_stretches_end():
    tasks = [make_task(start="2024-01-01", end="2024-01-10")]
    today = d("2024-03-01")
    assert derive_window(tasks, today=today).end == d("2024-01-31")
    assert derive_window(tasks, today=today, include_today=True).end == d("2024-03-22")


def test_zero_padding_single_day_is_widened():
    w = derive_window(
        [make_task(start="2024-01-01", end="2024-01-01")], today=d("2024-01-01"), pad_before=0, pad_after=0
    )
    assert w.span_days == 1


def test_collect_dates_skips_missing():
    tasks = [make_task(start="2024-01-01"), make_task()]
    assert collect_dates(tasks) == [d("2024-01-01")]


def test_contains_is_inclusive():
    w = DateWindow(date(2024, 1, 1), date(2024, 1, 31))
    assert w.contains(date(2024, 1, 1))
    assert w.contains(date(2024, 1, 31))
    assert not w.contains(date(2024, 2, 1))

# Rev 1.0.0
from __future__ import annotations

import pytest

from factories import d, make_task
from taskflow.services.task_status import bar_state, is_due_soon, is_overdue, progress_percent

TODAY = d("2024-05-15")


@pytest.mark.parametrize(
    "end,status,expected",
    [
        ("2024-05-14", "pending", True),
        ("2024-05-14", "blocked", True),
        ("2024-05-14", "completed", False),
        ("2024-05-14", "cancelled", False),
        ("2024-05-15", "pending", False),
        (None, "pending", False),
    ],
)
def test_is_overdue(end, status, expected):
    assert is_overdue(make_task(end=end, status=status), TODAY) is expected


def test_is_due_soon_window():
    assert is_due_soon(make_task(end="2024-05-15"), TODAY)
    assert is_due_soon(make_task(end="2024-05-18"), TODAY)
    assert not is_due_soon(make_task(end="2024-05-19"), TODAY)
    assert not is_due_soon(make_task(end="2024-05-14"), TODAY)
    assert not is_due_soon(make_task(end="2024-05-16", status="completed"), TODAY)
    assert is_due_soon(make_task(end="2024-05-22"), TODAY, days=7)


def test_progress_percent():
    assert progress_percent(make_task(status="completed", quantity=10, collected=1)) == 100
    assert progress_percent(make_task(status="cancelled")) == 0
    assert progress_percent(make_task(quantity=8, collected=3)) == 38
    assert progress_percent(make_task(quantity=0, collected=3)) == 0
    assert progress_percent(make_task(status="in_progress")) == 50
    assert progress_percent(make_task(status="blocked")) == 25


def test_bar_state():
    assert bar_state(make_task(end="2024-05-01", status="in_progress"), TODAY) == "overdue"
    assert bar_state(make_task(end="2024-05-30", status="in_progress"), TODAY) == "in_progress"

# Rev 1.0.0
from __future__ import annotations

import pytest

from factories import d
from taskflow.timeline.drag import DragInProgress, DragSession, offset_to_date, shift_range
from taskflow.timeline.window import DateWindow

WINDOW = DateWindow(d("2024-01-01"), d("2024-01-31"))


def test_offset_zero_is_window_start():
    assert offset_to_date(0, 600, WINDOW) == WINDOW.start


def test_full_track_is_window_end():
    assert offset_to_date(600, 600, WINDOW) == WINDOW.end


def test_offset_truncates_to_day():
    # 30 days over 600px: 20px per day
    assert offset_to_date(39.9, 600, WINDOW) == d("2024-01-02")
    assert offset_to_date(40, 600, WINDOW) == d("2024-01-03")


def test_offset_outside_track_is_clamped():
    assert offset_to_date(-50, 600, WINDOW) == WINDOW.start
    assert offset_to_date(900, 600, WINDOW) == WINDOW.end


def test_float_noise_does_not_lose_a_day():
    w = DateWindow(d("2024-01-01"), d("2024-01-11"))
    assert offset_to_date(0.3, 1.0, w) == d("2024-01-04")


def test_zero_track_rejected():
    with pytest.raises(ValueError):
        offset_to_date(10, 0, WINDOW)


def test_shift_range_keeps_duration():
    assert shift_range(d("2024-01-05"), d("2024-01-09"), d("2024-01-20")) == (d("2024-01-20"), d("2024-01-24"))
    assert shift_range(d("2024-01-05"), None, d("2024-01-20")) == (d("2024-01-20"), None)


def test_session_round_trip_uses_grab_offset():
    s = DragSession()
    s.begin("t1", pointer_px=110, bar_left_px=100)
    assert s.active and s.entity_id == "t1" and s.kind == "task"
    assert s.move(210) == 200
    entity_id, day = s.finish(600, WINDOW)
    assert entity_id == "t1"
    assert day == d("2024-01-11")
    assert not s.active


def test_session_rejects_reentry():
    s = DragSession()
    s.begin("t1", 0, 0)
    with pytest.raises(DragInProgress):
        s.begin("t2", 0, 0, kind="milestone")
    s.cancel()
    s.begin("t2", 0, 0, kind="milestone")
    assert s.kind == "milestone"


def test_move_without_drag_fails():
    with pytest.raises(RuntimeError):
        DragSession().move(10)
    with pytest.raises(RuntimeError):
        DragSession().finish(100, WINDOW)

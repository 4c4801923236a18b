# Rev 1.0.0
from __future__ import annotations

from factories import d, make_milestone, make_phase, make_task
from taskflow.timeline.grouping import group_by_phase, group_by_status
from taskflow.timeline.rows import MILESTONES_ROW_ID, to_render_rows
from taskflow.timeline.window import DateWindow

WINDOW = DateWindow(d("2024-01-01"), d("2024-01-31"))
PHASES = [make_phase("ph1", "Design", order=0, color="#EC4899"), make_phase("ph2", "Build", order=1)]


def _tasks():
    return [
        make_task("Wireframes", start="2024-01-05", end="2024-01-10", phase_id="ph1", sprint_date=d("2024-01-08")),
        make_task("API", start="2024-01-12", end="2024-01-20", phase_id="ph2", status="in_progress"),
        make_task("Loose", start="2024-01-15", phase_id=None),
    ]


def test_rows_in_group_then_task_order():
    rows = to_render_rows(group_by_phase(_tasks(), PHASES), WINDOW, today=d("2024-01-02"))
    assert [(r.kind, r.name) for r in rows] == [
        ("group", "Design"),
        ("task", "Wireframes"),
        ("group", "Build"),
        ("task", "API"),
        ("group", "No phase"),
        ("task", "Loose"),
    ]
    assert [r.order for r in rows] == list(range(len(rows)))
    assert rows[0].row_id == "group:ph1"
    assert rows[1].color == "#EC4899"
    assert rows[1].sprint_left is not None
    assert rows[3].progress == 50


def test_collapsed_group_keeps_header_only():
    rows = to_render_rows(group_by_phase(_tasks(), PHASES), WINDOW, collapsed={"ph1"})
    assert [r.name for r in rows][:2] == ["Design", "Build"]
    assert rows[0].collapsed is True
    assert rows[0].total == 1


def test_task_without_start_has_no_bar():
    rows = to_render_rows(group_by_status([make_task("Undated")]), WINDOW)
    assert rows[1].bar is None


def test_overdue_state():
    rows = to_render_rows(
        group_by_status([make_task("Late", start="2024-01-01", end="2024-01-05")]), WINDOW, today=d("2024-01-20")
    )
    assert rows[1].state == "overdue"


def test_phase_milestones_follow_their_phase_rows():
    milestones = [
        make_milestone("m1", "Sign-off", "2024-01-11", phase_id="ph1"),
        make_milestone("m2", "Kick-off", "2024-01-02"),
    ]
    rows = to_render_rows(group_by_phase(_tasks(), PHASES), WINDOW, milestones=milestones, group_mode="phase")
    assert rows[0].row_id == MILESTONES_ROW_ID
    assert [m.milestone.id for m in rows[0].markers] == ["m2"]
    assert rows[3].row_id == f"{MILESTONES_ROW_ID}:ph1"
    assert rows[3].markers[0].left == (d("2024-01-11") - WINDOW.start).days / 30 * 100


def test_other_modes_put_all_milestones_on_top():
    milestones = [
        make_milestone("m1", "Sign-off", "2024-01-11", phase_id="ph1"),
        make_milestone("m2", "Kick-off", "2024-01-02", end_date=d("2024-01-04")),
    ]
    rows = to_render_rows(group_by_status(_tasks()), WINDOW, milestones=milestones, group_mode="status")
    flag_rows = [r for r in rows if r.kind == "milestones"]
    assert len(flag_rows) == 1
    assert [m.milestone.id for m in flag_rows[0].markers] == ["m2", "m1"]
    assert flag_rows[0].markers[0].bar is not None
    assert flag_rows[0].markers[1].bar is None


def test_no_milestone_row_without_milestones():
    rows = to_render_rows(group_by_phase(_tasks(), PHASES), WINDOW)
    assert all(r.kind != "milestones" for r in rows)

# Rev 1.0.0
from __future__ import annotations

import pytest

from factories import d, make_person, make_phase, make_project, make_task
from taskflow.timeline.grouping import (
    NO_PHASE_ID,
    NO_PROJECT_ID,
    UNASSIGNED_ID,
    TaskGroup,
    group_by_phase,
    group_by_project,
    group_by_responsible,
    group_by_status,
    group_tasks,
    summarize,
)


def _ids(groups):
    return [g.id for g in groups]


def test_two_for_p1_one_unassigned():
    tasks = [make_task(responsible_id="p1"), make_task(responsible_id="p1"), make_task(responsible_id=None)]
    groups = group_by_responsible(tasks, [make_person("p1", "Ana")])
    assert [(g.id, g.total) for g in groups] == [("p1", 2), (UNASSIGNED_ID, 1)]


def test_responsible_partition_is_exact():
    people = [make_person("a", "Ana"), make_person("b", "Bruno"), make_person("c", "Carla")]
    tasks = [
        make_task(responsible_id="b"),
        make_task(responsible_id=None),
        make_task(responsible_id="a"),
        make_task(responsible_id="ghost"),
        make_task(responsible_id="b"),
        make_task(responsible_id=None),
    ]
    groups = group_by_responsible(tasks, people)
    seen = [t.id for g in groups for t in g.tasks]
    assert sorted(seen) == sorted(t.id for t in tasks)
    assert len(seen) == len(set(seen))
    unassigned = next(g for g in groups if g.id == UNASSIGNED_ID)
    assert {t.id for t in unassigned.tasks} == {t.id for t in tasks if t.responsible_id is None}
    # known people first in given order, empty "c" omitted, unknown before catch-all
    assert _ids(groups) == ["a", "b", "ghost", UNASSIGNED_ID]
    assert groups[2].kind == "unknown"
    assert groups[3].kind == "catch-all"


def test_person_group_carries_color_and_avatar():
    groups = group_by_responsible(
        [make_task(responsible_id="a")], [make_person("a", "Ana", color="#111111", avatar_url="http://x/a.png")]
    )
    assert groups[0].color == "#111111"
    assert groups[0].avatar_url == "http://x/a.png"


def test_phase_groups_follow_stored_order():
    phases = [make_phase("late", "Build", order=2), make_phase("early", "Discovery", order=0), make_phase("mid", "Design", order=1)]
    tasks = [make_task(phase_id="late"), make_task(phase_id=None), make_task(phase_id="early")]
    groups = group_by_phase(tasks, phases)
    assert _ids(groups) == ["early", "late", NO_PHASE_ID]


def test_status_groups_fixed_order():
    tasks = [make_task(status="completed"), make_task(status="pending"), make_task(status="blocked")]
    groups = group_by_status(tasks)
    assert _ids(groups) == ["pending", "blocked", "completed"]
    assert groups[0].name == "Pending"


def test_project_groups_unknown_projects_share_bucket():
    projects = [make_project("p1", "Site"), make_project("p2", "App")]
    tasks = [make_task(project_id="p2"), make_task(project_id="gone"), make_task(project_id="p1")]
    groups = group_by_project(tasks, projects)
    assert _ids(groups) == ["p1", "p2", NO_PROJECT_ID]
    assert groups[-1].total == 1


def test_completion_ratio():
    g = TaskGroup(id="x", name="X", tasks=[make_task(status="completed"), make_task(status="pending")])
    assert g.completed == 1
    assert g.completion_ratio == pytest.approx(0.5)
    assert TaskGroup(id="e", name="Empty").completion_ratio == 0.0


def test_empty_input_gives_no_groups():
    assert group_tasks([], "responsible", people=[make_person("a", "Ana")]) == []
    assert group_tasks([], "status") == []


def test_group_tasks_dispatch_and_unknown_mode():
    tasks = [make_task(status="pending")]
    assert _ids(group_tasks(tasks, "status")) == ["pending"]
    with pytest.raises(ValueError):
        group_tasks(tasks, "priority")


def test_summarize_counts_overdue():
    today = d("2024-03-10")
    tasks = [
        make_task(end="2024-03-01", status="pending"),
        make_task(end="2024-03-01", status="completed"),
        make_task(end="2024-03-20", status="in_progress"),
    ]
    s = summarize(tasks, today)
    assert (s.total, s.completed, s.overdue) == (3, 1, 1)

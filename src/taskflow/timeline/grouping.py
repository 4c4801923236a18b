# Rev 1.0.0
"""Partition tasks into timeline groups.

Every input task lands in exactly one group. Empty buckets are omitted.
Tasks that reference an id the caller did not supply (a person, phase or
project that is not in the lists) get a bucket of their own, named after the id,
placed after the known buckets and before the catch-all bucket.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from taskflow.models.entities import Person, Phase, Project, Task
from taskflow.models.types import GroupMode, STATUS_COLORS, STATUS_LABELS, TASK_STATUSES
from taskflow.services.task_status import is_overdue

UNASSIGNED_ID = "unassigned"
NO_PHASE_ID = "no-phase"
NO_PROJECT_ID = "no-project"


@dataclass
class TaskGroup:
    id: str
    name: str
    tasks: List[Task] = field(default_factory=list)
    color: Optional[str] = None
    avatar_url: Optional[str] = None
    kind: str = "known"  # known | unknown | catch-all

    @property
    def total(self) -> int:
        return len(self.tasks)

    @property
    def completed(self) -> int:
        return sum(1 for t in self.tasks if t.status == "completed")

    @property
    def completion_ratio(self) -> float:
        total = self.total
        return self.completed / total if total > 0 else 0.0


@dataclass(frozen=True)
class TaskSummary:
    total: int
    completed: int
    overdue: int


def _bucket(tasks: Sequence[Task], key: Callable[[Task], Optional[str]]) -> Dict[Optional[str], List[Task]]:
    # dict keeps first-seen order, which orders the unknown-id buckets
    buckets: Dict[Optional[str], List[Task]] = {}
    for t in tasks:
        buckets.setdefault(key(t) or None, []).append(t)
    return buckets


def _assemble(
    buckets: Dict[Optional[str], List[Task]],
    known: Iterable[TaskGroup],
    fallback_id: str,
    fallback_name: str,
) -> List[TaskGroup]:
    groups: List[TaskGroup] = []
    for g in known:
        g.tasks = buckets.pop(g.id, [])
        if g.tasks:
            groups.append(g)
    missing = buckets.pop(None, [])
    for unknown_id, tasks in buckets.items():
        groups.append(TaskGroup(id=unknown_id, name=unknown_id, tasks=tasks, kind="unknown"))
    if missing:
        groups.append(TaskGroup(id=fallback_id, name=fallback_name, tasks=missing, kind="catch-all"))
    return groups


def group_by_responsible(tasks: Sequence[Task], people: Sequence[Person]) -> List[TaskGroup]:
    buckets = _bucket(tasks, lambda t: t.responsible_id)
    known = (TaskGroup(id=p.id, name=p.name, color=p.color, avatar_url=p.avatar_url) for p in people)
    return _assemble(buckets, known, UNASSIGNED_ID, "Unassigned")


def group_by_phase(tasks: Sequence[Task], phases: Sequence[Phase]) -> List[TaskGroup]:
    buckets = _bucket(tasks, lambda t: t.phase_id)
    ordered = sorted(phases, key=lambda p: p.order)
    known = (TaskGroup(id=p.id, name=p.name, color=p.color) for p in ordered)
    return _assemble(buckets, known, NO_PHASE_ID, "No phase")


def group_by_project(tasks: Sequence[Task], projects: Sequence[Project]) -> List[TaskGroup]:
    known_ids = {p.id for p in projects}
    # unknown projects share one bucket, like tasks without a project
    buckets = _bucket(tasks, lambda t: t.project_id if t.project_id in known_ids else None)
    known = (TaskGroup(id=p.id, name=p.name) for p in projects)
    return _assemble(buckets, known, NO_PROJECT_ID, "No project")


def group_by_status(tasks: Sequence[Task]) -> List[TaskGroup]:
    buckets = _bucket(tasks, lambda t: t.status)
    known = (TaskGroup(id=s, name=STATUS_LABELS[s], color=STATUS_COLORS[s]) for s in TASK_STATUSES)
    return _assemble(buckets, known, "no-status", "No status")


def group_tasks(
    tasks: Sequence[Task],
    mode: GroupMode,
    *,
    people: Sequence[Person] = (),
    phases: Sequence[Phase] = (),
    projects: Sequence[Project] = (),
) -> List[TaskGroup]:
    if mode == "responsible":
        return group_by_responsible(tasks, people)
    if mode == "phase":
        return group_by_phase(tasks, phases)
    if mode == "status":
        return group_by_status(tasks)
    if mode == "project":
        return group_by_project(tasks, projects)
    raise ValueError(f"Unknown group mode: {mode!r}")


def summarize(tasks: Iterable[Task], today: Optional[date] = None) -> TaskSummary:
    total = completed = overdue = 0
    for t in tasks:
        total += 1
        if t.status == "completed":
            completed += 1
        if is_overdue(t, today):
            overdue += 1
    return TaskSummary(total, completed, overdue)

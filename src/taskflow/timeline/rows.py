# Rev 1.0.0
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import AbstractSet, List, Optional, Sequence

from taskflow.models.entities import Milestone, Task
from taskflow.models.types import GroupMode
from taskflow.services.task_status import bar_state, progress_percent

from .grouping import TaskGroup
from .positions import BarPosition, bar_position, marker_position
from .window import DateWindow

MILESTONES_ROW_ID = "milestones"


@dataclass(frozen=True)
class MilestoneMarker:
    milestone: Milestone
    left: float
    # set when the milestone spans a start/end pair
    bar: Optional[BarPosition] = None


@dataclass
class RenderRow:
    """
    One line of the timeline, top to bottom.

    kind: "milestones" (flag row), "group" (header) or "task" (bar row).
    """

    order: int
    kind: str
    row_id: str
    name: str
    group_id: Optional[str] = None
    indent: int = 0
    color: Optional[str] = None
    collapsed: bool = False
    task: Optional[Task] = None
    bar: Optional[BarPosition] = None
    sprint_left: Optional[float] = None
    state: Optional[str] = None
    progress: int = 0
    total: int = 0
    completed: int = 0
    markers: List[MilestoneMarker] = field(default_factory=list)


def _markers(milestones: Sequence[Milestone], window: DateWindow) -> List[MilestoneMarker]:
    out: List[MilestoneMarker] = []
    for m in sorted(milestones, key=lambda m: (m.date is None, m.date or date.min, m.name)):
        left = marker_position(m.date, window)
        if left is None:
            continue
        span = bar_position(m.date, m.end_date, window) if m.end_date else None
        out.append(MilestoneMarker(m, left, span))
    return out


def to_render_rows(
    groups: Sequence[TaskGroup],
    window: DateWindow,
    *,
    milestones: Sequence[Milestone] = (),
    collapsed: AbstractSet[str] = frozenset(),
    group_mode: GroupMode = "phase",
    today: Optional[date] = None,
) -> List[RenderRow]:
    """
    Flatten groups into ordered render rows.

    Milestones without a phase row to live on (all of them unless grouping
    by phase) go into a single flag row at the top. When grouping by phase,
    a phase's own milestones follow its task rows. Collapsed groups keep the
    header and drop every child row.
    """
    rows: List[RenderRow] = []
    group_ids = {g.id for g in groups}

    def per_phase(m: Milestone) -> bool:
        return group_mode == "phase" and m.phase_id is not None and m.phase_id in group_ids

    top = [m for m in milestones if not per_phase(m)]
    if top:
        rows.append(
            RenderRow(len(rows), "milestones", MILESTONES_ROW_ID, "Milestones", markers=_markers(top, window))
        )

    for g in groups:
        is_collapsed = g.id in collapsed
        rows.append(
            RenderRow(
                len(rows),
                "group",
                f"group:{g.id}",
                g.name,
                group_id=g.id,
                color=g.color,
                collapsed=is_collapsed,
                total=g.total,
                completed=g.completed,
            )
        )
        if is_collapsed:
            continue
        for t in g.tasks:
            rows.append(
                RenderRow(
                    len(rows),
                    "task",
                    t.id,
                    t.name,
                    group_id=g.id,
                    indent=1,
                    color=g.color,
                    task=t,
                    bar=bar_position(t.start_date, t.end_date, window),
                    sprint_left=marker_position(t.sprint_date, window),
                    state=bar_state(t, today),
                    progress=progress_percent(t),
                )
            )
        own = [m for m in milestones if per_phase(m) and m.phase_id == g.id]
        if own:
            rows.append(
                RenderRow(
                    len(rows),
                    "milestones",
                    f"{MILESTONES_ROW_ID}:{g.id}",
                    "Milestones",
                    group_id=g.id,
                    indent=1,
                    markers=_markers(own, window),
                )
            )
    return rows

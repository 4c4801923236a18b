# Rev 1.0.0
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional

from PySide6.QtCore import QObject, Signal

from taskflow.filters.custom_columns import CustomFilter, count_active_filters, matches_custom_filters
from taskflow.models.types import GROUP_MODES, ZOOM_LEVELS, GroupMode, ZoomLevel
from taskflow.timeline.columns import Column, column_width_px, generate_columns, today_column_index
from taskflow.timeline.drag import shift_range
from taskflow.timeline.grouping import TaskGroup, TaskSummary, group_tasks, summarize
from taskflow.timeline.positions import marker_position
from taskflow.timeline.rows import RenderRow, to_render_rows
from taskflow.timeline.window import (
    COMPACT_PAD_AFTER_DAYS,
    COMPACT_PAD_BEFORE_DAYS,
    PAD_AFTER_DAYS,
    PAD_BEFORE_DAYS,
    DateWindow,
    derive_window,
)
from taskflow.utils.logging_setup import get_logger

from .data_viewmodel import DataViewModel

log = get_logger(__name__)


@dataclass
class TimelineLayout:
    """Everything the Gantt widget needs to paint one frame."""

    window: DateWindow
    zoom: ZoomLevel
    group_mode: GroupMode
    columns: List[Column]
    column_width: int
    groups: List[TaskGroup]
    rows: List[RenderRow]
    summary: TaskSummary
    today: date
    today_left: Optional[float] = None
    today_index: Optional[int] = None
    active_filters: int = 0
    collapsed: frozenset = field(default_factory=frozenset)


class GanttViewModel(QObject):
    """
    Timeline state for one project (or every project when none is set).

    Recomputes the layout whenever the data cache changes and emits
    layoutChanged(TimelineLayout). Drags are written back through the data
    view-model; a failed write surfaces on its errorRaised signal and the
    layout keeps the persisted dates.
    """

    layoutChanged = Signal(object)

    def __init__(
        self,
        data: DataViewModel,
        *,
        settings: Optional[Mapping[str, Any]] = None,
        today: Callable[[], date] = date.today,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        gantt = dict((settings or {}).get("gantt", {}))
        self._data = data
        self._today = today
        self._project_id: Optional[str] = None
        self._zoom: ZoomLevel = gantt.get("zoom", "week") if gantt.get("zoom") in ZOOM_LEVELS else "week"
        self._group_mode: GroupMode = gantt.get("group_by", "phase") if gantt.get("group_by") in GROUP_MODES else "phase"
        self._pad_before = int(gantt.get("pad_before_days", COMPACT_PAD_BEFORE_DAYS))
        self._pad_after = int(gantt.get("pad_after_days", COMPACT_PAD_AFTER_DAYS))
        self._collapsed: set[str] = set()
        self._filters: Dict[str, CustomFilter] = {}
        self._layout: Optional[TimelineLayout] = None
        self._data.changed.connect(self.refresh)

    # ---- state
    @property
    def project_id(self) -> Optional[str]:
        return self._project_id

    @property
    def zoom(self) -> ZoomLevel:
        return self._zoom

    @property
    def group_mode(self) -> GroupMode:
        return self._group_mode

    @property
    def layout(self) -> Optional[TimelineLayout]:
        return self._layout

    def set_project(self, project_id: Optional[str]) -> None:
        if project_id != self._project_id:
            self._project_id = project_id
            self._collapsed.clear()
            self._filters.clear()
        self.refresh()

    def set_zoom(self, zoom: ZoomLevel) -> None:
        if zoom not in ZOOM_LEVELS:
            raise ValueError(f"Unknown zoom level: {zoom!r}")
        self._zoom = zoom
        self.refresh()

    def set_group_mode(self, mode: GroupMode) -> None:
        if mode not in GROUP_MODES:
            raise ValueError(f"Unknown group mode: {mode!r}")
        if mode != self._group_mode:
            self._group_mode = mode
            self._collapsed.clear()
        self.refresh()

    def toggle_group(self, group_id: str) -> None:
        if group_id in self._collapsed:
            self._collapsed.remove(group_id)
        else:
            self._collapsed.add(group_id)
        self.refresh()

    def set_filters(self, filters: Mapping[str, CustomFilter]) -> None:
        self._filters = dict(filters)
        self.refresh()

    def clear_filters(self) -> None:
        self._filters.clear()
        self.refresh()

    # ---- layout
    def refresh(self) -> TimelineLayout:
        self._layout = self._compute()
        self.layoutChanged.emit(self._layout)
        return self._layout

    def _compute(self) -> TimelineLayout:
        data, pid, today = self._data, self._project_id, self._today()
        if pid is None:
            tasks, phases, milestones = data.tasks, data.phases, data.milestones
            columns_meta = [c for c in data.custom_columns if c.active]
        else:
            tasks = data.tasks_for_project(pid)
            phases = data.phases_for_project(pid)
            milestones = data.milestones_for_project(pid)
            columns_meta = data.custom_columns_for_project(pid)

        if self._filters:
            tasks = [t for t in tasks if matches_custom_filters(t, self._filters, columns_meta)]

        if pid is None:
            window = derive_window(
                tasks, today=today, pad_before=PAD_BEFORE_DAYS, pad_after=PAD_AFTER_DAYS, include_today=True
            )
        else:
            window = derive_window(
                tasks, phases, milestones, today=today, pad_before=self._pad_before, pad_after=self._pad_after
            )

        groups = group_tasks(
            tasks, self._group_mode, people=data.people, phases=phases, projects=data.projects
        )
        rows = to_render_rows(
            groups,
            window,
            milestones=milestones,
            collapsed=self._collapsed,
            group_mode=self._group_mode,
            today=today,
        )
        columns = generate_columns(window, self._zoom)
        return TimelineLayout(
            window=window,
            zoom=self._zoom,
            group_mode=self._group_mode,
            columns=columns,
            column_width=column_width_px(self._zoom),
            groups=groups,
            rows=rows,
            summary=summarize(tasks, today),
            today=today,
            today_left=marker_position(today, window) if window.contains(today) else None,
            today_index=today_column_index(columns, today),
            active_filters=count_active_filters(self._filters),
            collapsed=frozenset(self._collapsed),
        )

    # ---- drag-to-reschedule
    def reschedule_task(self, task_id: str, new_start: date) -> bool:
        task = self._data.task(task_id)
        if task is None or task.start_date is None:
            log.warning("Cannot reschedule task %s: unknown or undated", task_id)
            return False
        start, end = shift_range(task.start_date, task.end_date, new_start)
        if start == task.start_date:
            return True
        log.info("Rescheduling task %s to %s", task_id, start.isoformat())
        return self._data.update_task(task_id, start_date=start, end_date=end) is not None

    def reschedule_milestone(self, milestone_id: str, new_date: date) -> bool:
        milestone = self._data.milestone(milestone_id)
        if milestone is None or milestone.date is None:
            log.warning("Cannot reschedule milestone %s: unknown or undated", milestone_id)
            return False
        start, end = shift_range(milestone.date, milestone.end_date, new_date)
        if start == milestone.date:
            return True
        log.info("Rescheduling milestone %s to %s", milestone_id, start.isoformat())
        fields: Dict[str, Any] = {"date": start}
        if end is not None:
            fields["end_date"] = end
        return self._data.update_milestone(milestone_id, **fields) is not None

    def apply_drag(self, kind: str, entity_id: str, new_start: date) -> bool:
        if kind == "milestone":
            return self.reschedule_milestone(entity_id, new_start)
        return self.reschedule_task(entity_id, new_start)

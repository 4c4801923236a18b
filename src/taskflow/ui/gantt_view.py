# Rev 1.0.0
# taskflow - Gantt timeline widget
# Header | labels | chart, sharing scroll positions. Painting is driven by the
# TimelineLayout published by GanttViewModel; nothing here computes dates.
from __future__ import annotations

from typing import Optional, Tuple

from PySide6.QtCore import Qt, QPointF, QRect, QRectF, Signal
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen, QPolygonF
from PySide6.QtWidgets import (
    QButtonGroup, QComboBox, QFrame, QGridLayout, QHBoxLayout, QLabel, QMenu,
    QPushButton, QScrollArea, QToolButton, QVBoxLayout, QWidget
)

from taskflow.models.types import GROUP_MODE_LABELS, GROUP_MODES, STATUS_COLORS, ZOOM_LEVELS
from taskflow.timeline.drag import DragSession
from taskflow.timeline.positions import column_spans
from taskflow.timeline.rows import RenderRow
from taskflow.utils.logging_setup import get_logger
from taskflow.viewmodels.gantt_viewmodel import GanttViewModel, TimelineLayout

log = get_logger(__name__)

ROW_H = 34
HEADER_H = 44
LABEL_W = 240
BAR_H = 20
MARKER_HIT_PX = 7
DRAG_THRESHOLD_PX = 3

BAR_COLORS = dict(STATUS_COLORS, overdue="#EF4444")
TODAY_COLOR = "#EF4444"
GRID_COLOR = "#E5E7EB"
GROUP_BG = "#F3F4F6"
MILESTONE_BG = "#FEF9C3"

_ZOOM_LABELS = {"day": "Day", "week": "Week", "month": "Month"}


def _track_width(layout: Optional[TimelineLayout]) -> int:
    if layout is None:
        return 0
    return len(layout.columns) * layout.column_width


def _column_spans(layout: TimelineLayout) -> list[tuple[float, float]]:
    return column_spans([c.date for c in layout.columns], layout.window, _track_width(layout))


class _HeaderCanvas(QWidget):
    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._layout: Optional[TimelineLayout] = None
        self.setFixedHeight(HEADER_H)

    def set_timeline(self, layout: TimelineLayout) -> None:
        self._layout = layout
        self.setFixedWidth(max(_track_width(layout), 1))
        self.update()

    def paintEvent(self, ev):
        if self._layout is None:
            return
        p = QPainter(self)
        small = QFont(self.font())
        small.setPointSizeF(max(small.pointSizeF() - 2, 6))
        spans = _column_spans(self._layout)
        for i, (col, (x, w)) in enumerate(zip(self._layout.columns, spans)):
            if i == self._layout.today_index:
                p.fillRect(QRectF(x, 0, w, HEADER_H), QColor("#DBEAFE"))
            p.setPen(QPen(QColor(GRID_COLOR)))
            p.drawLine(QPointF(x, 0), QPointF(x, HEADER_H))
            p.setPen(QPen(QColor("#111827")))
            p.setFont(self.font())
            p.drawText(QRectF(x, HEADER_H // 2, w, HEADER_H // 2), Qt.AlignHCenter | Qt.AlignTop, col.label)
            if col.sub_label:
                p.setFont(small)
                p.setPen(QPen(QColor("#6B7280")))
                p.drawText(QRectF(x, 0, w, HEADER_H // 2), Qt.AlignHCenter | Qt.AlignBottom, col.sub_label)
        p.setPen(QPen(QColor(GRID_COLOR)))
        p.drawLine(0, HEADER_H - 1, self.width(), HEADER_H - 1)
        p.end()


class _LabelsCanvas(QWidget):
    groupToggled = Signal(str)
    groupActivated = Signal(str)
    taskActivated = Signal(str)

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._rows: list[RenderRow] = []
        self.setFixedWidth(LABEL_W)

    def set_timeline(self, layout: TimelineLayout) -> None:
        self._rows = layout.rows
        self.setFixedHeight(max(len(self._rows) * ROW_H, 1))
        self.update()

    def _row_at(self, y: int) -> Optional[RenderRow]:
        ix = y // ROW_H
        return self._rows[ix] if 0 <= ix < len(self._rows) else None

    def mousePressEvent(self, ev):
        row = self._row_at(int(ev.position().y()))
        if row is not None and row.kind == "group" and ev.button() == Qt.LeftButton:
            self.groupToggled.emit(row.group_id)
            return
        super().mousePressEvent(ev)

    def mouseDoubleClickEvent(self, ev):
        row = self._row_at(int(ev.position().y()))
        if row is not None and row.kind == "task":
            self.taskActivated.emit(row.row_id)
            return
        if row is not None and row.kind == "group":
            self.groupActivated.emit(row.group_id)
            return
        super().mouseDoubleClickEvent(ev)

    def paintEvent(self, ev):
        p = QPainter(self)
        bold = QFont(self.font())
        bold.setBold(True)
        for i, row in enumerate(self._rows):
            y = i * ROW_H
            rect = QRect(0, y, LABEL_W, ROW_H)
            x = 8 + row.indent * 16
            if row.kind == "group":
                p.fillRect(rect, QColor(GROUP_BG))
                p.setFont(bold)
                p.setPen(QPen(QColor("#111827")))
                p.drawText(QRect(x, y, 14, ROW_H), Qt.AlignVCenter, "▸" if row.collapsed else "▾")
                x += 16
                if row.color:
                    p.setBrush(QBrush(QColor(row.color)))
                    p.setPen(Qt.NoPen)
                    p.drawEllipse(QRect(x, y + ROW_H // 2 - 5, 10, 10))
                    x += 16
                p.setPen(QPen(QColor("#111827")))
                p.drawText(QRect(x, y, LABEL_W - x - 52, ROW_H), Qt.AlignVCenter | Qt.AlignLeft, row.name)
                p.setFont(self.font())
                p.setPen(QPen(QColor("#6B7280")))
                p.drawText(QRect(LABEL_W - 52, y, 44, ROW_H), Qt.AlignVCenter | Qt.AlignRight,
                           f"{row.completed}/{row.total}")
            elif row.kind == "milestones":
                p.fillRect(rect, QColor(MILESTONE_BG))
                p.setFont(self.font())
                p.setPen(QPen(QColor("#A16207")))
                p.drawText(QRect(x, y, LABEL_W - x, ROW_H), Qt.AlignVCenter | Qt.AlignLeft, f"⚑ {row.name}")
            else:
                p.setFont(self.font())
                p.setPen(QPen(QColor("#B91C1C" if row.state == "overdue" else "#111827")))
                p.drawText(QRect(x, y, LABEL_W - x - 40, ROW_H), Qt.AlignVCenter | Qt.AlignLeft, row.name)
                p.setPen(QPen(QColor("#6B7280")))
                p.drawText(QRect(LABEL_W - 44, y, 36, ROW_H), Qt.AlignVCenter | Qt.AlignRight, f"{row.progress}%")
            p.setPen(QPen(QColor(GRID_COLOR)))
            p.drawLine(0, y + ROW_H - 1, LABEL_W, y + ROW_H - 1)
        p.end()


class _ChartCanvas(QWidget):
    barDropped = Signal(str, str, object)  # kind, entity id, new start date
    taskActivated = Signal(str)
    milestoneActivated = Signal(str)
    deleteRequested = Signal(str)

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._layout: Optional[TimelineLayout] = None
        self._session = DragSession()
        self._press_x = 0.0
        self._moved = False
        self._preview: Optional[Tuple[str, float]] = None  # entity id, left px
        self.setMouseTracking(True)

    def set_timeline(self, layout: TimelineLayout) -> None:
        # a refresh mid-drag invalidates the grab; drop it
        if self._session.active:
            self._session.cancel()
            self._preview = None
        self._layout = layout
        self.setFixedSize(max(_track_width(layout), 1), max(len(layout.rows) * ROW_H, ROW_H))
        self.update()

    # ---- geometry
    def _px(self, pct: float) -> float:
        return pct / 100.0 * self.width()

    def _row_at(self, y: float) -> Optional[RenderRow]:
        if self._layout is None:
            return None
        ix = int(y // ROW_H)
        return self._layout.rows[ix] if 0 <= ix < len(self._layout.rows) else None

    def _hit(self, pos: QPointF) -> Optional[Tuple[str, str, float]]:
        """(kind, entity id, left px) of the bar or marker under the pointer."""
        row = self._row_at(pos.y())
        if row is None:
            return None
        if row.kind == "task" and row.bar is not None:
            left = self._px(row.bar.left)
            right = left + max(self._px(row.bar.width), 6.0)
            if left <= pos.x() <= right:
                return "task", row.row_id, left
        if row.kind == "milestones":
            for marker in row.markers:
                x = self._px(marker.left)
                if abs(pos.x() - x) <= MARKER_HIT_PX:
                    return "milestone", marker.milestone.id, x
        return None

    # ---- mouse
    def mousePressEvent(self, ev):
        if ev.button() != Qt.LeftButton or self._layout is None:
            return super().mousePressEvent(ev)
        hit = self._hit(ev.position())
        if hit is None:
            return super().mousePressEvent(ev)
        kind, entity_id, left = hit
        self._session.begin(entity_id, ev.position().x(), left, kind)
        self._press_x = ev.position().x()
        self._moved = False
        self.setCursor(Qt.ClosedHandCursor)

    def mouseMoveEvent(self, ev):
        if self._session.active:
            left = self._session.move(ev.position().x())
            if abs(ev.position().x() - self._press_x) >= DRAG_THRESHOLD_PX:
                self._moved = True
                self._preview = (self._session.entity_id, left)
                self.update()
            return
        self.setCursor(Qt.OpenHandCursor if self._hit(ev.position()) else Qt.ArrowCursor)
        super().mouseMoveEvent(ev)

    def mouseReleaseEvent(self, ev):
        if not self._session.active:
            return super().mouseReleaseEvent(ev)
        self.unsetCursor()
        self._preview = None
        kind = self._session.kind
        if not self._moved or self._layout is None or self.width() <= 0:
            self._session.cancel()
            self.update()
            return
        entity_id, new_start = self._session.finish(self.width(), self._layout.window)
        self.update()
        log.debug("Dropped %s %s on %s", kind, entity_id, new_start)
        self.barDropped.emit(kind, entity_id, new_start)

    def mouseDoubleClickEvent(self, ev):
        hit = self._hit(ev.position())
        if hit is None:
            return super().mouseDoubleClickEvent(ev)
        kind, entity_id, _ = hit
        if kind == "milestone":
            self.milestoneActivated.emit(entity_id)
        else:
            self.taskActivated.emit(entity_id)

    def contextMenuEvent(self, ev):
        hit = self._hit(QPointF(ev.pos()))
        if hit is None or hit[0] != "task":
            return
        entity_id = hit[1]
        menu = QMenu(self)
        act_edit = menu.addAction("Edit…")
        act_delete = menu.addAction("Delete")
        chosen = menu.exec(ev.globalPos())
        if chosen is act_edit:
            self.taskActivated.emit(entity_id)
        elif chosen is act_delete:
            self.deleteRequested.emit(entity_id)

    # ---- painting
    def paintEvent(self, ev):
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing, True)
        if self._layout is None or not self._layout.rows:
            p.setPen(QPen(QColor("#6B7280")))
            p.drawText(self.rect(), Qt.AlignCenter, "No tasks to show")
            p.end()
            return
        lay = self._layout
        h = self.height()

        for i, (x, w) in enumerate(_column_spans(lay)):
            if i % 2:
                p.fillRect(QRectF(x, 0, w, h), QColor("#FAFAFA"))
            p.setPen(QPen(QColor(GRID_COLOR)))
            p.drawLine(QPointF(x, 0), QPointF(x, h))

        for i, row in enumerate(lay.rows):
            y = i * ROW_H
            if row.kind == "group":
                p.fillRect(QRect(0, y, self.width(), ROW_H), QColor(GROUP_BG))
            elif row.kind == "milestones":
                p.fillRect(QRect(0, y, self.width(), ROW_H), QColor(MILESTONE_BG))
                self._paint_markers(p, row, y)
            else:
                self._paint_task(p, row, y)
            p.setPen(QPen(QColor(GRID_COLOR)))
            p.drawLine(0, y + ROW_H - 1, self.width(), y + ROW_H - 1)

        if lay.today_left is not None:
            x = self._px(lay.today_left)
            pen = QPen(QColor(TODAY_COLOR))
            pen.setWidth(2)
            pen.setStyle(Qt.DashLine)
            p.setPen(pen)
            p.drawLine(QPointF(x, 0), QPointF(x, h))
        p.end()

    def _paint_task(self, p: QPainter, row: RenderRow, y: int) -> None:
        if row.bar is None:
            return
        left = self._px(row.bar.left)
        if self._preview and self._preview[0] == row.row_id:
            left = self._preview[1]
        width = max(self._px(row.bar.width), 6.0)
        rect = QRectF(left, y + (ROW_H - BAR_H) / 2, width, BAR_H)
        color = QColor(BAR_COLORS.get(row.state or "pending", BAR_COLORS["pending"]))
        p.setPen(Qt.NoPen)
        p.setBrush(QBrush(color.lighter(140)))
        p.drawRoundedRect(rect, 4, 4)
        if row.progress:
            done = QRectF(rect)
            done.setWidth(rect.width() * min(row.progress, 100) / 100.0)
            p.setBrush(QBrush(color))
            p.drawRoundedRect(done, 4, 4)
        if width > 60:
            p.setPen(QPen(QColor("white")))
            p.drawText(rect.adjusted(6, 0, -4, 0), Qt.AlignVCenter | Qt.AlignLeft, row.name)
        if row.sprint_left is not None:
            self._diamond(p, self._px(row.sprint_left), y + ROW_H / 2, 6, QColor("#7C3AED"))

    def _paint_markers(self, p: QPainter, row: RenderRow, y: int) -> None:
        for marker in row.markers:
            m = marker.milestone
            color = QColor(m.color or "#EAB308")
            x = marker.left
            if self._preview and self._preview[0] == m.id:
                x_px = self._preview[1]
            else:
                x_px = self._px(x)
            if marker.bar is not None:
                span = QRectF(x_px, y + ROW_H / 2 - 3, max(self._px(marker.bar.width), 2.0), 6)
                faded = QColor(color)
                faded.setAlpha(90)
                p.setPen(Qt.NoPen)
                p.setBrush(QBrush(faded))
                p.drawRect(span)
            self._flag(p, x_px, y, color, m.completed)

    @staticmethod
    def _diamond(p: QPainter, cx: float, cy: float, r: float, color: QColor) -> None:
        poly = QPolygonF([QPointF(cx, cy - r), QPointF(cx + r, cy), QPointF(cx, cy + r), QPointF(cx - r, cy)])
        p.setPen(Qt.NoPen)
        p.setBrush(QBrush(color))
        p.drawPolygon(poly)

    @staticmethod
    def _flag(p: QPainter, x: float, y: int, color: QColor, completed: bool) -> None:
        top = y + 6
        p.setPen(QPen(color, 2))
        p.drawLine(QPointF(x, top), QPointF(x, y + ROW_H - 6))
        poly = QPolygonF([QPointF(x, top), QPointF(x + 12, top + 5), QPointF(x, top + 10)])
        p.setPen(Qt.NoPen)
        p.setBrush(QBrush(color if completed else color.lighter(130)))
        p.drawPolygon(poly)


class GanttView(QWidget):
    addTaskRequested = Signal()
    editTaskRequested = Signal(str)
    deleteTaskRequested = Signal(str)
    addMilestoneRequested = Signal()
    milestoneEdited = Signal(str)
    phaseEditRequested = Signal(str)

    def __init__(self, vm: GanttViewModel, parent: QWidget | None = None):
        super().__init__(parent)
        self._vm = vm
        self._scroll_to_today_pending = True

        # ---------- Toolbar ----------
        self._cmb_group = QComboBox()
        for mode in GROUP_MODES:
            self._cmb_group.addItem(GROUP_MODE_LABELS[mode], mode)
        self._cmb_group.setCurrentIndex(max(self._cmb_group.findData(vm.group_mode), 0))
        self._cmb_group.currentIndexChanged.connect(
            lambda _ix: self._vm.set_group_mode(self._cmb_group.currentData())
        )

        self._zoom_group = QButtonGroup(self)
        self._zoom_group.setExclusive(True)
        zoom_bar = QHBoxLayout()
        zoom_bar.setSpacing(0)
        for zoom in ZOOM_LEVELS:
            btn = QToolButton()
            btn.setText(_ZOOM_LABELS[zoom])
            btn.setCheckable(True)
            btn.setChecked(zoom == vm.zoom)
            btn.setProperty("zoom", zoom)
            self._zoom_group.addButton(btn)
            zoom_bar.addWidget(btn)
        self._zoom_group.buttonClicked.connect(lambda b: self._vm.set_zoom(b.property("zoom")))

        self._btn_today = QPushButton("Today")
        self._btn_today.clicked.connect(self.scroll_to_today)
        self._btn_add_task = QPushButton("New Task")
        self._btn_add_task.clicked.connect(lambda: self.addTaskRequested.emit())
        self._btn_add_milestone = QPushButton("New Milestone")
        self._btn_add_milestone.clicked.connect(lambda: self.addMilestoneRequested.emit())
        self._lbl_summary = QLabel("")
        self._lbl_summary.setObjectName("ganttSummary")

        top_bar = QHBoxLayout()
        top_bar.addWidget(QLabel("Group by:"))
        top_bar.addWidget(self._cmb_group)
        top_bar.addSpacing(12)
        top_bar.addLayout(zoom_bar)
        top_bar.addWidget(self._btn_today)
        top_bar.addSpacing(12)
        top_bar.addWidget(self._lbl_summary)
        top_bar.addStretch(1)
        top_bar.addWidget(self._btn_add_milestone)
        top_bar.addWidget(self._btn_add_task)

        # ---------- Canvases ----------
        self._header = _HeaderCanvas()
        self._labels = _LabelsCanvas()
        self._chart = _ChartCanvas()

        self._header_area = self._bare_area(self._header)
        self._labels_area = self._bare_area(self._labels)
        self._chart_area = QScrollArea()
        self._chart_area.setWidget(self._chart)
        self._chart_area.setWidgetResizable(False)
        self._chart_area.setFrameShape(QFrame.NoFrame)
        self._header_area.setFixedHeight(HEADER_H)
        self._labels_area.setFixedWidth(LABEL_W)

        # header follows horizontal scroll, labels follow vertical scroll
        self._chart_area.horizontalScrollBar().valueChanged.connect(self._header_area.horizontalScrollBar().setValue)
        self._chart_area.verticalScrollBar().valueChanged.connect(self._labels_area.verticalScrollBar().setValue)
        self._labels_area.verticalScrollBar().valueChanged.connect(self._chart_area.verticalScrollBar().setValue)

        corner = QLabel("Task")
        corner.setFixedSize(LABEL_W, HEADER_H)
        corner.setAlignment(Qt.AlignVCenter | Qt.AlignLeft)
        corner.setContentsMargins(8, 0, 0, 0)

        grid = QGridLayout()
        grid.setSpacing(0)
        grid.addWidget(corner, 0, 0)
        grid.addWidget(self._header_area, 0, 1)
        grid.addWidget(self._labels_area, 1, 0)
        grid.addWidget(self._chart_area, 1, 1)
        grid.setRowStretch(1, 1)
        grid.setColumnStretch(1, 1)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addLayout(top_bar)
        root.addLayout(grid, 1)

        # ---------- Wiring ----------
        self._labels.groupToggled.connect(self._vm.toggle_group)
        self._labels.taskActivated.connect(self.editTaskRequested)
        self._labels.groupActivated.connect(self._on_group_activated)
        self._chart.taskActivated.connect(self.editTaskRequested)
        self._chart.milestoneActivated.connect(self.milestoneEdited)
        self._chart.deleteRequested.connect(self.deleteTaskRequested)
        self._chart.barDropped.connect(self._on_bar_dropped)
        self._vm.layoutChanged.connect(self._on_layout_changed)

        if vm.layout is not None:
            self._on_layout_changed(vm.layout)

    @staticmethod
    def _bare_area(widget: QWidget) -> QScrollArea:
        area = QScrollArea()
        area.setWidget(widget)
        area.setWidgetResizable(False)
        area.setFrameShape(QFrame.NoFrame)
        area.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        area.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        return area

    # ---------- Public API ----------
    def set_project(self, project_id: Optional[str]) -> None:
        self._scroll_to_today_pending = True
        self._btn_add_task.setEnabled(project_id is not None)
        self._btn_add_milestone.setEnabled(project_id is not None)
        self._vm.set_project(project_id)

    def scroll_to_today(self) -> None:
        layout = self._vm.layout
        if layout is None or layout.today_index is None:
            return
        x, _ = _column_spans(layout)[layout.today_index]
        x = int(x)
        bar = self._chart_area.horizontalScrollBar()
        bar.setValue(max(0, x - self._chart_area.viewport().width() // 2))

    # ---------- Internals ----------
    def _on_layout_changed(self, layout: TimelineLayout) -> None:
        self._header.set_timeline(layout)
        self._labels.set_timeline(layout)
        self._chart.set_timeline(layout)
        s = layout.summary
        text = f"{s.total} tasks, {s.completed} completed"
        if s.overdue:
            text += f", {s.overdue} overdue"
        if layout.active_filters:
            text += f" ({layout.active_filters} filters)"
        self._lbl_summary.setText(text)
        ix = self._cmb_group.findData(layout.group_mode)
        if ix >= 0 and ix != self._cmb_group.currentIndex():
            self._cmb_group.blockSignals(True)
            self._cmb_group.setCurrentIndex(ix)
            self._cmb_group.blockSignals(False)
        if self._scroll_to_today_pending:
            self._scroll_to_today_pending = False
            self.scroll_to_today()

    def _on_bar_dropped(self, kind: str, entity_id: str, new_start) -> None:
        self._vm.apply_drag(kind, entity_id, new_start)

    def _on_group_activated(self, group_id: str) -> None:
        layout = self._vm.layout
        if layout is None or layout.group_mode != "phase":
            return
        if any(g.id == group_id and g.kind == "known" for g in layout.groups):
            self.phaseEditRequested.emit(group_id)

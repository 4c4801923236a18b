# Rev 1.0.0
"""Drag-to-reschedule: pixel offsets on the track back to calendar days."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from .window import DateWindow

# Absorbs float noise such as 0.3 * 10 == 2.9999999999999996
_EPS = 1e-9


class DragInProgress(RuntimeError):
    """A second drag was started while another one is active."""


def offset_to_date(offset_px: float, track_px: float, window: DateWindow) -> date:
    """Offset 0 maps to the window start and the full track width to the window end."""
    if track_px <= 0:
        raise ValueError(f"track width must be positive, got {track_px!r}")
    offset = min(max(offset_px, 0.0), float(track_px))
    fraction = offset / track_px
    days = int(math.floor(fraction * window.span_days + _EPS))
    return window.start + timedelta(days=days)


def shift_range(start: date, end: Optional[date], new_start: date) -> tuple[date, Optional[date]]:
    """Move a start/end pair so it begins on `new_start`, keeping its duration."""
    if end is None:
        return new_start, None
    return new_start, new_start + (end - start)


@dataclass
class _ActiveDrag:
    entity_id: str
    kind: str
    grab_offset_px: float


class DragSession:
    """
    Tracks the one drag gesture allowed at a time.

    The grab offset is the distance between the pointer and the bar's left
    edge at press time, so the bar does not jump under the cursor.
    """

    def __init__(self) -> None:
        self._active: Optional[_ActiveDrag] = None
        self._last_offset: Optional[float] = None

    @property
    def active(self) -> bool:
        return self._active is not None

    @property
    def entity_id(self) -> Optional[str]:
        return self._active.entity_id if self._active else None

    @property
    def kind(self) -> Optional[str]:
        return self._active.kind if self._active else None

    def begin(self, entity_id: str, pointer_px: float, bar_left_px: float, kind: str = "task") -> None:
        if self._active is not None:
            raise DragInProgress(f"drag of {self._active.kind} '{self._active.entity_id}' still active")
        self._active = _ActiveDrag(entity_id, kind, pointer_px - bar_left_px)
        self._last_offset = bar_left_px

    def move(self, pointer_px: float) -> float:
        """Returns the bar's new left edge in pixels."""
        if self._active is None:
            raise RuntimeError("no active drag")
        self._last_offset = pointer_px - self._active.grab_offset_px
        return self._last_offset

    def finish(self, track_px: float, window: DateWindow) -> tuple[str, date]:
        """End the drag and return (entity id, new start day)."""
        if self._active is None or self._last_offset is None:
            raise RuntimeError("no active drag")
        entity_id = self._active.entity_id
        offset = self._last_offset
        self.cancel()
        return entity_id, offset_to_date(offset, track_px, window)

    def cancel(self) -> None:
        self._active = None
        self._last_offset = None

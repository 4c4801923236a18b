# Rev 1.0.0
"""Horizontal placement of bars and markers as percentages of the window span."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from .window import DateWindow

# Floor so zero-length bars stay visible
MIN_BAR_WIDTH_PCT = 0.5


def _pct(value: float) -> str:
    return f"{value:g}%"


@dataclass(frozen=True)
class BarPosition:
    left: float
    width: float

    @property
    def left_css(self) -> str:
        return _pct(self.left)

    @property
    def width_css(self) -> str:
        return _pct(self.width)

    @property
    def right(self) -> float:
        return self.left + self.width


def _span(window: DateWindow) -> int:
    return max(window.span_days, 1)


def marker_position(day: Optional[date], window: DateWindow) -> Optional[float]:
    """Left offset (percent) of a single day: today line, sprint diamond, milestone flag."""
    if day is None:
        return None
    return (day - window.start).days / _span(window) * 100


def bar_position(
    start: Optional[date],
    end: Optional[date],
    window: DateWindow,
    min_width: float = MIN_BAR_WIDTH_PCT,
) -> Optional[BarPosition]:
    """None when there is no start date; a missing end collapses to a marker-width bar."""
    if start is None:
        return None
    if end is None:
        end = start
    span = _span(window)
    left = (start - window.start).days / span * 100
    width = max((end - start).days / span * 100, min_width)
    return BarPosition(left, width)


def column_spans(days: Sequence[date], window: DateWindow, track_px: float) -> list[tuple[float, float]]:
    """
    Pixel (x, width) of each column on a track of `track_px`.

    Columns sit on the same day scale as bars and markers, so a column edge
    and a bar starting on that column's date share one x. Each column runs
    to the next column's edge; the last one runs to the end of the track.
    """
    xs = [min(max(marker_position(day, window), 0.0), 100.0) / 100.0 * track_px for day in days]
    ends = xs[1:] + [float(track_px)]
    return [(x, max(end - x, 0.0)) for x, end in zip(xs, ends)]

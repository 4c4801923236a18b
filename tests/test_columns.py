# Rev 1.0.0
from __future__ import annotations

from datetime import timedelta

import pytest

from factories import d
from taskflow.timeline.columns import column_width_px, generate_columns, today_column_index
from taskflow.timeline.window import DateWindow

WINDOW = DateWindow(d("2023-12-18"), d("2024-02-26"))


@pytest.mark.parametrize("zoom", ["day", "week", "month"])
def test_columns_strictly_increasing_and_cover_window(zoom):
    cols = generate_columns(WINDOW, zoom)
    dates = [c.date for c in cols]
    assert dates == sorted(set(dates))
    assert dates[0] == WINDOW.start
    assert dates[-1] <= WINDOW.end
    step = {"day": timedelta(days=1), "week": timedelta(days=7), "month": timedelta(days=31)}[zoom]
    assert dates[-1] >= WINDOW.end - step


def test_day_labels_mark_month_boundary():
    cols = generate_columns(DateWindow(d("2024-01-30"), d("2024-02-02")), "day")
    assert [c.label for c in cols] == ["30", "31", "01", "02"]
    assert [c.sub_label for c in cols] == [None, None, "Feb", None]


def test_week_labels_and_count():
    cols = generate_columns(DateWindow(d("2024-01-01"), d("2024-01-29")), "week")
    assert [c.label for c in cols] == ["01/01", "08/01", "15/01", "22/01", "29/01"]


def test_month_columns_snap_to_first():
    cols = generate_columns(DateWindow(d("2023-11-15"), d("2024-02-10")), "month")
    assert [c.date for c in cols] == [d("2023-11-15"), d("2023-12-01"), d("2024-01-01"), d("2024-02-01")]
    assert [(c.label, c.sub_label) for c in cols][1:3] == [("Dec", "23"), ("Jan", "24")]


def test_unknown_zoom_rejected():
    with pytest.raises(ValueError):
        generate_columns(WINDOW, "year")
    with pytest.raises(ValueError):
        column_width_px("quarter")


def test_today_column_index():
    cols = generate_columns(DateWindow(d("2024-01-01"), d("2024-01-29")), "week")
    assert today_column_index(cols, d("2024-01-10")) == 1
    assert today_column_index(cols, d("2024-01-29")) == 4
    assert today_column_index(cols, d("2023-12-31")) is None
    assert today_column_index([], d("2024-01-01")) is None

# Rev 1.0.0
from __future__ import annotations

import pytest

from factories import make_task
from taskflow.filters.custom_columns import CustomFilter, count_active_filters, matches_custom_filters
from taskflow.models.entities import CustomColumn

COLUMNS = [
    CustomColumn(id="c_text", project_id="p1", name="Notes", type="text"),
    CustomColumn(id="c_list", project_id="p1", name="Area", type="list", options=["Front", "Back"]),
    CustomColumn(id="c_num", project_id="p1", name="Points", type="number"),
    CustomColumn(id="c_pct", project_id="p1", name="Done", type="percentage"),
    CustomColumn(id="c_date", project_id="p1", name="Review", type="date"),
    CustomColumn(id="c_user", project_id="p1", name="Reviewer", type="user"),
]


def _task(**values):
    return make_task(custom_values=values)


def test_no_filters_match_everything():
    assert matches_custom_filters(_task(), {}, COLUMNS)
    assert matches_custom_filters(_task(), {"c_text": CustomFilter()}, COLUMNS)


def test_text_is_case_insensitive_contains():
    flt = {"c_text": CustomFilter(text="LOGIN")}
    assert matches_custom_filters(_task(c_text="Fix login page"), flt, COLUMNS)
    assert not matches_custom_filters(_task(c_text="Header"), flt, COLUMNS)
    assert not matches_custom_filters(_task(), flt, COLUMNS)


@pytest.mark.parametrize("column_id", ["c_list", "c_user"])
def test_selection_membership(column_id):
    flt = {column_id: CustomFilter(selected=["Front", "u1"])}
    assert matches_custom_filters(_task(**{column_id: "Front"}), flt, COLUMNS)
    assert matches_custom_filters(_task(**{column_id: "u1"}), flt, COLUMNS)
    assert not matches_custom_filters(_task(**{column_id: "Back"}), flt, COLUMNS)


def test_number_range_and_empty_values():
    flt = {"c_num": CustomFilter(min=2, max=5)}
    assert matches_custom_filters(_task(c_num=2), flt, COLUMNS)
    assert matches_custom_filters(_task(c_num="4.5"), flt, COLUMNS)
    assert not matches_custom_filters(_task(c_num=6), flt, COLUMNS)
    assert not matches_custom_filters(_task(), flt, COLUMNS)
    assert not matches_custom_filters(_task(c_num="lots"), flt, COLUMNS)


def test_open_ended_percentage_range():
    flt = {"c_pct": CustomFilter(min="50", max="")}
    assert matches_custom_filters(_task(c_pct=75), flt, COLUMNS)
    assert not matches_custom_filters(_task(c_pct=10), flt, COLUMNS)


def test_date_range_compares_iso_text():
    flt = {"c_date": CustomFilter(min="2024-02-01", max="2024-02-29")}
    assert matches_custom_filters(_task(c_date="2024-02-10"), flt, COLUMNS)
    assert not matches_custom_filters(_task(c_date="2024-03-01"), flt, COLUMNS)
    assert not matches_custom_filters(_task(c_date=""), flt, COLUMNS)


def test_every_active_filter_must_pass():
    flt = {"c_text": CustomFilter(text="api"), "c_num": CustomFilter(max=3)}
    assert matches_custom_filters(_task(c_text="API docs", c_num=1), flt, COLUMNS)
    assert not matches_custom_filters(_task(c_text="API docs", c_num=9), flt, COLUMNS)


def test_filters_on_unknown_columns_are_ignored():
    assert matches_custom_filters(_task(), {"gone": CustomFilter(text="x")}, COLUMNS)


def test_count_active_filters():
    flt = {"a": CustomFilter(), "b": CustomFilter(text="x"), "c": CustomFilter(min=0)}
    assert count_active_filters(flt) == 2

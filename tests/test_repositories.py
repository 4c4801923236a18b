# Rev 1.0.0
from __future__ import annotations

import sqlite3

import pytest

from factories import d
from taskflow.errors import EntityNotFound, IntegrityViolation


def _project(repos, name="Demo"):
    return repos["projects"].create_project(name=name)


def test_migrations_are_recorded_once(db):
    assert "0001_init.sql" in db.applied()
    assert db.run_migrations() == []


def test_project_round_trip(repos):
    p = repos["projects"].create_project(name="Site", start_date=d("2024-01-01"), visible_fields=["phase"])
    got = repos["projects"].get_project(p.id)
    assert got.name == "Site"
    assert got.status == "planning"
    assert got.start_date == d("2024-01-01")
    assert got.visible_fields == ["phase"]


def test_default_visible_fields(repos):
    p = _project(repos)
    assert "responsible" in p.visible_fields


def test_task_round_trip_with_custom_values(repos):
    p = _project(repos)
    t = repos["tasks"].create_task(
        project_id=p.id,
        name="Write copy",
        start_date=d("2024-02-01"),
        end_date=d("2024-02-03"),
        custom_values={"col1": "Front", "col2": 4},
    )
    assert t.custom_values == {"col1": "Front", "col2": 4}
    assert t.status == "pending"
    assert t.updated_at is not None
    updated = repos["tasks"].update_task(t.id, status="completed", end_date=None)
    assert updated.status == "completed"
    assert updated.end_date is None
    assert updated.updated_at >= t.updated_at


def test_phase_order_is_assigned_in_sequence(repos):
    p = _project(repos)
    a = repos["phases"].create_phase(project_id=p.id, name="A")
    b = repos["phases"].create_phase(project_id=p.id, name="B")
    assert (a.order, b.order) == (0, 1)
    assert [ph.name for ph in repos["phases"].list_phases(p.id)] == ["A", "B"]


def test_task_phase_must_belong_to_same_project(repos):
    p1, p2 = _project(repos, "One"), _project(repos, "Two")
    phase = repos["phases"].create_phase(project_id=p2.id, name="Other")
    with pytest.raises(IntegrityViolation):
        repos["tasks"].create_task(project_id=p1.id, name="T", phase_id=phase.id)
    with pytest.raises(IntegrityViolation):
        repos["tasks"].create_task(project_id=p1.id, name="T", phase_id="missing")
    t = repos["tasks"].create_task(project_id=p1.id, name="T")
    with pytest.raises(IntegrityViolation):
        repos["tasks"].update_task(t.id, phase_id=phase.id)


def test_milestone_phase_must_belong_to_same_project(repos):
    p1, p2 = _project(repos, "One"), _project(repos, "Two")
    phase = repos["phases"].create_phase(project_id=p2.id, name="Other")
    with pytest.raises(IntegrityViolation):
        repos["milestones"].create_milestone(project_id=p1.id, name="M", date=d("2024-01-01"), phase_id=phase.id)


def test_delete_project_cascades(repos, db_conn):
    p = _project(repos)
    ph = repos["phases"].create_phase(project_id=p.id, name="A")
    repos["tasks"].create_task(project_id=p.id, name="T", phase_id=ph.id)
    repos["milestones"].create_milestone(project_id=p.id, name="M", date=d("2024-01-01"))
    repos["custom_columns"].create_custom_column(project_id=p.id, name="Area", type="list")
    repos["projects"].delete_project(p.id)
    for table in ("phases", "tasks", "milestones", "custom_columns"):
        (n,) = db_conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
        assert n == 0, table


def test_delete_phase_and_person_null_references(repos):
    p = _project(repos)
    ph = repos["phases"].create_phase(project_id=p.id, name="A")
    person = repos["people"].create_person(name="Ana")
    t = repos["tasks"].create_task(project_id=p.id, name="T", phase_id=ph.id, responsible_id=person.id)
    m = repos["milestones"].create_milestone(project_id=p.id, name="M", date=d("2024-01-01"), phase_id=ph.id)
    repos["phases"].delete_phase(ph.id)
    repos["people"].delete_person(person.id)
    got = repos["tasks"].get_task(t.id)
    assert got.phase_id is None
    assert got.responsible_id is None
    assert repos["milestones"].get_milestone(m.id).phase_id is None


def test_missing_ids_raise_not_found(repos):
    with pytest.raises(EntityNotFound) as exc:
        repos["tasks"].update_task("nope", name="x")
    assert exc.value.kind == "task"
    with pytest.raises(EntityNotFound):
        repos["people"].delete_person("nope")
    with pytest.raises(EntityNotFound):
        repos["projects"].update_project("nope")
    assert repos["milestones"].get_milestone("nope") is None


def test_unknown_field_rejected(repos):
    p = _project(repos)
    with pytest.raises(ValueError):
        repos["tasks"].create_task(project_id=p.id, name="T", colour="red")


def test_check_constraint_on_status(repos):
    p = _project(repos)
    with pytest.raises(sqlite3.IntegrityError):
        repos["tasks"].create_task(project_id=p.id, name="T", status="done")


def test_task_needs_live_project(repos):
    with pytest.raises(sqlite3.IntegrityError):
        repos["tasks"].create_task(project_id="ghost", name="T")


def test_people_listing(repos):
    repos["people"].create_person(name="bruno", active=False)
    repos["people"].create_person(name="Ana", type="partner")
    assert [p.name for p in repos["people"].list_people()] == ["Ana", "bruno"]
    assert [p.name for p in repos["people"].list_people(active_only=True)] == ["Ana"]


def test_custom_column_options_and_order(repos):
    p = _project(repos)
    c = repos["custom_columns"].create_custom_column(
        project_id=p.id, name="Area", type="list", options=["A", "B"], is_milestone=True
    )
    assert c.options == ["A", "B"]
    assert c.is_milestone is True
    assert repos["custom_columns"].update_custom_column(c.id, order=3).order == 3


def test_malformed_date_reads_as_none(repos, db_conn):
    p = _project(repos)
    t = repos["tasks"].create_task(project_id=p.id, name="T", start_date=d("2024-01-01"))
    db_conn.execute("UPDATE tasks SET start_date = 'soon' WHERE id = ?", (t.id,))
    assert repos["tasks"].get_task(t.id).start_date is None


@pytest.mark.parametrize("stored", ["null", "[1]", "3", "\"x\""])
def test_wrong_shape_json_reads_as_default(repos, db_conn, stored):
    p = _project(repos)
    t = repos["tasks"].create_task(project_id=p.id, name="T")
    c = repos["custom_columns"].create_custom_column(project_id=p.id, name="Kind", type="list", options=["a"])
    db_conn.execute("UPDATE tasks SET custom_values = ? WHERE id = ?", (stored, t.id))
    db_conn.execute("UPDATE custom_columns SET options = ? WHERE id = ?", ("{}" if stored == "[1]" else stored, c.id))
    db_conn.execute("UPDATE projects SET visible_fields = ? WHERE id = ?", ("{}" if stored == "[1]" else stored, p.id))
    assert repos["tasks"].get_task(t.id).custom_values == {}
    assert repos["custom_columns"].get_custom_column(c.id).options == []
    assert repos["projects"].get_project(p.id).visible_fields == []


def test_updated_at_trigger_touches_rows(repos, db_conn):
    p = _project(repos)
    (before,) = db_conn.execute("SELECT updated_at FROM projects WHERE id = ?", (p.id,)).fetchone()
    db_conn.execute("UPDATE projects SET updated_at = '2000-01-01T00:00:00Z' WHERE id = ?", (p.id,))
    db_conn.execute("UPDATE projects SET name = 'Renamed' WHERE id = ?", (p.id,))
    (after,) = db_conn.execute("SELECT updated_at FROM projects WHERE id = ?", (p.id,)).fetchone()
    assert after != "2000-01-01T00:00:00Z"
    assert after >= before


def test_failed_migration_rolls_back(tmp_path):
    from taskflow.repositories.db import Database

    mig = tmp_path / "migrations"
    mig.mkdir()
    (mig / "0001_ok.sql").write_text("CREATE TABLE things (id INTEGER PRIMARY KEY);", encoding="utf-8")
    (mig / "0002_bad.sql").write_text(
        "CREATE TABLE half (id INTEGER);\nINSERT INTO missing_table VALUES (1);", encoding="utf-8"
    )
    db = Database(tmp_path / "m.db")
    try:
        with pytest.raises(sqlite3.OperationalError):
            db.run_migrations(mig)
        tables = {r[0] for r in db.conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert "things" in tables
        assert "half" not in tables
        assert db.pending(mig) == ["0002_bad.sql"]
    finally:
        db.close()

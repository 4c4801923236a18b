# Rev 1.0.0

"""Pytest fixtures for TaskFlow"""
from __future__ import annotations
from pathlib import Path

import pytest

from taskflow.repositories.db import Database
from taskflow.repositories.sqlite_custom_column_repository import SQLiteCustomColumnRepository
from taskflow.repositories.sqlite_milestone_repository import SQLiteMilestoneRepository
from taskflow.repositories.sqlite_person_repository import SQLitePersonRepository
from taskflow.repositories.sqlite_phase_repository import SQLitePhaseRepository
from taskflow.repositories.sqlite_project_repository import SQLiteProjectRepository
from taskflow.repositories.sqlite_task_repository import SQLiteTaskRepository


@pytest.fixture()
def db(tmp_path: Path):
    database = Database(path=tmp_path / "test.db")
    try:
        database.run_migrations()
        yield database
    finally:
        database.close()


@pytest.fixture()
def db_conn(db):
    return db.conn


@pytest.fixture()
def repos(db):
    return {
        "projects": SQLiteProjectRepository(db),
        "people": SQLitePersonRepository(db),
        "phases": SQLitePhaseRepository(db),
        "tasks": SQLiteTaskRepository(db),
        "milestones": SQLiteMilestoneRepository(db),
        "custom_columns": SQLiteCustomColumnRepository(db),
    }


@pytest.fixture(scope="session")
def qapp():
    # Signals on QObject only need a core application, no display
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture()
def data_vm(qapp, repos):
    from taskflow.viewmodels.data_viewmodel import DataViewModel

    vm = DataViewModel(
        projects_repo=repos["projects"],
        people_repo=repos["people"],
        phases_repo=repos["phases"],
        tasks_repo=repos["tasks"],
        milestones_repo=repos["milestones"],
        custom_columns_repo=repos["custom_columns"],
    )
    vm.reload()
    return vm

# taskflow application context
# Rev 1.0.0

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from taskflow.repositories.db import Database
from taskflow.repositories.sqlite_custom_column_repository import SQLiteCustomColumnRepository
from taskflow.repositories.sqlite_milestone_repository import SQLiteMilestoneRepository
from taskflow.repositories.sqlite_person_repository import SQLitePersonRepository
from taskflow.repositories.sqlite_phase_repository import SQLitePhaseRepository
from taskflow.repositories.sqlite_project_repository import SQLiteProjectRepository
from taskflow.repositories.sqlite_task_repository import SQLiteTaskRepository
from taskflow.utils.config import load_settings
from taskflow.utils.logging_setup import get_logger
from taskflow.viewmodels.data_viewmodel import DataViewModel
from taskflow.viewmodels.gantt_viewmodel import GanttViewModel


@dataclass
class AppContext:
    """Central container for shared app resources."""
    db: Database
    settings: Dict[str, Any]
    data: DataViewModel
    gantt: GanttViewModel

    @classmethod
    def create(cls, db_path: Optional[Path | str] = None, settings: Optional[Dict[str, Any]] = None) -> "AppContext":
        """Open + migrate the DB, wire repositories into the view-models."""
        log = get_logger("AppContext")
        db = Database(db_path)
        applied = db.run_migrations()
        if applied:
            log.info("Applied migrations: %s", ", ".join(applied))
        settings = settings if settings is not None else load_settings()
        data = DataViewModel(
            projects_repo=SQLiteProjectRepository(db),
            people_repo=SQLitePersonRepository(db),
            phases_repo=SQLitePhaseRepository(db),
            tasks_repo=SQLiteTaskRepository(db),
            milestones_repo=SQLiteMilestoneRepository(db),
            custom_columns_repo=SQLiteCustomColumnRepository(db),
        )
        gantt = GanttViewModel(data, settings=settings)
        log.info("AppContext initialized with DB=%s", db.path)
        return cls(db=db, settings=settings, data=data, gantt=gantt)

    def close(self) -> None:
        self.db.close()

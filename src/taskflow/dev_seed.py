# Rev 1.0.0
"""
Developer seed: one demo project with phases, people, tasks, milestones and a
custom column, dated around today so the Gantt shows something useful.

Usage:
    python -m taskflow.dev_seed [--db PATH]
"""
from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from taskflow.repositories.db import Database
from taskflow.repositories.sqlite_custom_column_repository import SQLiteCustomColumnRepository
from taskflow.repositories.sqlite_milestone_repository import SQLiteMilestoneRepository
from taskflow.repositories.sqlite_person_repository import SQLitePersonRepository
from taskflow.repositories.sqlite_phase_repository import SQLitePhaseRepository
from taskflow.repositories.sqlite_project_repository import SQLiteProjectRepository
from taskflow.repositories.sqlite_task_repository import SQLiteTaskRepository
from taskflow.utils.logging_setup import get_logger

log = get_logger(__name__)


def seed_demo(db, today: Optional[date] = None) -> Dict[str, Any]:
    """Insert the demo data through the repositories; returns ids and counts."""
    today = today or date.today()

    def d(offset: int) -> date:
        return today + timedelta(days=offset)

    people_repo = SQLitePersonRepository(db)
    ana = people_repo.create_person(name="Ana Souza", email="ana@example.com", color="#3B82F6")
    bruno = people_repo.create_person(name="Bruno Lima", email="bruno@example.com", color="#10B981")
    carla = people_repo.create_person(name="Carla Dias", type="partner", color="#F97316")

    project = SQLiteProjectRepository(db).create_project(
        name="Website Relaunch",
        description="Demo project created by the developer seed.",
        status="active",
        start_date=d(-20),
        end_date=d(60),
    )

    phases_repo = SQLitePhaseRepository(db)
    discovery = phases_repo.create_phase(project_id=project.id, name="Discovery", color="#8B5CF6")
    design = phases_repo.create_phase(project_id=project.id, name="Design", color="#EC4899")
    build = phases_repo.create_phase(project_id=project.id, name="Build", color="#0EA5E9")

    column = SQLiteCustomColumnRepository(db).create_custom_column(
        project_id=project.id, name="Area", type="list", options=["Front-end", "Back-end", "Content"]
    )

    tasks_repo = SQLiteTaskRepository(db)
    specs = [
        ("Stakeholder interviews", discovery, ana, d(-20), d(-12), "completed", None, None, "Content"),
        ("Audit current site", discovery, bruno, d(-15), d(-5), "completed", None, None, "Content"),
        ("Wireframes", design, carla, d(-6), d(4), "in_progress", 12, 7, "Front-end"),
        ("Visual identity", design, None, d(-3), d(-1), "pending", None, None, "Front-end"),
        ("CMS setup", build, bruno, d(2), d(16), "pending", None, None, "Back-end"),
        ("Page templates", build, ana, d(10), d(30), "blocked", None, None, "Front-end"),
        ("Content migration", None, None, d(20), d(35), "pending", 40, 0, "Content"),
    ]
    for name, phase, person, start, end, status, qty, got, area in specs:
        tasks_repo.create_task(
            project_id=project.id,
            name=name,
            phase_id=phase.id if phase else None,
            responsible_id=person.id if person else None,
            start_date=start,
            end_date=end,
            sprint_date=end - timedelta(days=2) if status == "in_progress" else None,
            status=status,
            priority="high" if status == "blocked" else "medium",
            quantity=qty,
            collected=got,
            custom_values={column.id: area},
        )

    milestones_repo = SQLiteMilestoneRepository(db)
    milestones_repo.create_milestone(project_id=project.id, name="Kick-off", date=d(-20), completed=True)
    milestones_repo.create_milestone(project_id=project.id, name="Design sign-off", date=d(6), phase_id=design.id)
    milestones_repo.create_milestone(project_id=project.id, name="Launch window", date=d(38), end_date=d(42))

    log.info("Seeded demo project %s", project.id)
    return {"project_id": project.id, "tasks": len(specs), "people": 3, "phases": 3, "milestones": 3}


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="taskflow-seed", description="Insert the TaskFlow demo project")
    p.add_argument("--db", type=Path, default=None, help="Path to SQLite DB (default: TASKFLOW_DB or data dir)")
    ns = p.parse_args(sys.argv[1:] if argv is None else argv)
    db = Database(ns.db)
    try:
        db.run_migrations()
        summary = seed_demo(db)
    finally:
        db.close()
    print(f"=== Seeded project {summary['project_id']} with {summary['tasks']} tasks ===")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

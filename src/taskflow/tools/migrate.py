# File: src/taskflow/tools/migrate.py
# Usage examples:
#   python -m taskflow.tools.migrate up
#   python -m taskflow.tools.migrate status
#   python -m taskflow.tools.migrate rebuild --seed
#   python -m taskflow.tools.migrate up --db /path/to/taskflow.db
#
# Notes:
# - DB path defaults to env TASKFLOW_DB or the XDG data dir
# - Applies the packaged taskflow/data/migrations/*.sql in lexicographic order
# - Records applied migrations in schema_migrations (same table the app uses)
# - --seed loads the demo project from taskflow.dev_seed

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from taskflow.repositories.db import Database
from taskflow.utils.paths import MIGRATIONS_DIR, db_path

REQUIRED_TABLES = (
    "people",
    "projects",
    "phases",
    "tasks",
    "milestones",
    "custom_columns",
    "schema_migrations",
)
EXPECTED_TRIGGERS = (
    "trg_people_touch",
    "trg_projects_touch",
    "trg_phases_touch",
    "trg_tasks_touch",
    "trg_milestones_touch",
    "trg_custom_columns_touch",
)


def _seed(db: Database) -> None:
    from taskflow.dev_seed import seed_demo

    summary = seed_demo(db)
    print(f"→ Seeded demo project {summary['project_id']} ({summary['tasks']} tasks)")


def cmd_status(db_file: Path, migrations_dir: Path) -> int:
    db = Database(db_file)
    try:
        rows = db.conn.execute("SELECT filename, applied_at FROM schema_migrations ORDER BY filename").fetchall()
        print(f"DB: {db_file}")
        print(f"Migrations dir: {migrations_dir}")
        print(f"Applied count: {len(rows)}")
        for name, when in rows:
            print(f"  ✔ {name}  ({when})")
        pending = db.pending(migrations_dir)
        print(f"Pending count: {len(pending)}")
        for name in pending:
            print(f"  ⧗ {name}")
        return 0
    finally:
        db.close()


def cmd_up(db_file: Path, migrations_dir: Path, seed: bool) -> int:
    db = Database(db_file)
    try:
        applied = db.run_migrations(migrations_dir)
        for name in applied:
            print(f"→ Applied migration: {name}")
        if applied:
            print("✓ Database is up to date.")
        else:
            print("✓ No changes. Database already up to date.")
        if seed:
            _seed(db)
        return 0
    finally:
        db.close()


def cmd_rebuild(db_file: Path, migrations_dir: Path, seed: bool) -> int:
    # Drop DB file (and WAL side files) and rebuild from migrations
    for suffix in ("", "-wal", "-shm"):
        p = Path(f"{db_file}{suffix}")
        if p.exists():
            print(f"⟲ Rebuilding: removing {p}")
            p.unlink()
    db = Database(db_file)
    try:
        db.run_migrations(migrations_dir)
        if seed:
            _seed(db)
        print("✓ Rebuild complete.")
        return 0
    finally:
        db.close()


def cmd_verify(db_file: Path) -> int:
    db = Database(db_file)
    try:
        names = {r[0] for r in db.conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%';"
        )}
        missing = [t for t in REQUIRED_TABLES if t not in names]
        if missing:
            print("❌ Missing tables:", ", ".join(missing))
            return 2

        trig = {r[0] for r in db.conn.execute("SELECT name FROM sqlite_master WHERE type='trigger';")}
        trig_missing = [t for t in EXPECTED_TRIGGERS if t not in trig]
        if trig_missing:
            print("❌ Missing triggers:", ", ".join(trig_missing))
            return 3

        (mode,) = db.conn.execute("PRAGMA journal_mode;").fetchone()
        if str(mode).lower() != "wal":
            print(f"❌ journal_mode is not WAL (got {mode})")
            return 4

        print("✓ Verification passed.")
        return 0
    finally:
        db.close()


def parse_args(argv: list[str]) -> argparse.Namespace:
    default_db = db_path()
    p = argparse.ArgumentParser(prog="taskflow-migrate", description="SQLite migration runner for TaskFlow")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(sp: argparse.ArgumentParser):
        sp.add_argument("--db", type=Path, default=default_db, help=f"Path to SQLite DB (default: {default_db})")
        sp.add_argument("--migrations-dir", type=Path, default=MIGRATIONS_DIR, help="Migrations directory")

    s_up = sub.add_parser("up", help="Run pending migrations")
    add_common(s_up)
    s_up.add_argument("--seed", action="store_true", help="Seed the demo project after applying")

    s_rebuild = sub.add_parser("rebuild", help="Drop and recreate DB from migrations")
    add_common(s_rebuild)
    s_rebuild.add_argument("--seed", action="store_true", help="Seed the demo project after rebuild")

    s_status = sub.add_parser("status", help="Show applied and pending migrations")
    add_common(s_status)

    s_verify = sub.add_parser("verify", help="Lightweight structural verification")
    s_verify.add_argument("--db", type=Path, default=default_db, help=f"Path to SQLite DB (default: {default_db})")

    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    ns = parse_args(sys.argv[1:] if argv is None else argv)
    if ns.cmd == "status":
        return cmd_status(ns.db, ns.migrations_dir)
    if ns.cmd == "up":
        return cmd_up(ns.db, ns.migrations_dir, ns.seed)
    if ns.cmd == "rebuild":
        return cmd_rebuild(ns.db, ns.migrations_dir, ns.seed)
    if ns.cmd == "verify":
        return cmd_verify(ns.db)
    raise SystemExit(1)


if __name__ == "__main__":
    raise SystemExit(main())

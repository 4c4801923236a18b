# Rev 1.0.0

"""SQLite connection & migration runner
- WAL mode, foreign_keys=ON, sqlite3.Row rows
- Applies SQL files in taskflow/data/migrations in lexical order
- Tracks applied files in schema_migrations(filename TEXT PRIMARY KEY, applied_at UTC)
"""
from __future__ import annotations
import sqlite3
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional

from taskflow.utils.logging_setup import get_logger
from taskflow.utils.paths import MIGRATIONS_DIR, db_path

log = get_logger(__name__)


class Database:
    def __init__(self, path: Optional[Path | str] = None) -> None:
        self.path = Path(path) if path is not None else db_path()
        if str(self.path) != ":memory:":
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self.path), isolation_level=None, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL;")
        self.conn.execute("PRAGMA foreign_keys=ON;")
        self.conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations (filename TEXT PRIMARY KEY, applied_at TEXT NOT NULL)"
        )
        log.info("SQLite open %s", self.path)

    def close(self) -> None:
        try:
            self.conn.close()
        except sqlite3.Error as exc:
            log.warning("Closing %s failed: %s", self.path, exc)

    def applied(self) -> set[str]:
        rows = self.conn.execute("SELECT filename FROM schema_migrations").fetchall()
        return {r[0] for r in rows}

    def pending(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        applied = self.applied()
        return [p.name for p in sorted(migrations_dir.glob("*.sql")) if p.name not in applied]

    def _apply_migration(self, path: Path) -> None:
        # one transaction per file: the script and its bookkeeping row land together
        stamp = datetime.now(timezone.utc).isoformat()
        name = path.name.replace("'", "''")
        script = (
            "BEGIN;\n"
            + path.read_text(encoding="utf-8")
            + f"\n;INSERT INTO schema_migrations(filename, applied_at) VALUES('{name}', '{stamp}');\nCOMMIT;"
        )
        try:
            self.conn.executescript(script)
        except sqlite3.Error:
            if self.conn.in_transaction:
                self.conn.execute("ROLLBACK")
            log.error("Migration %s failed; rolled back", path.name)
            raise

    def run_migrations(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        to_apply = [migrations_dir / name for name in self.pending(migrations_dir)]
        for p in to_apply:
            self._apply_migration(p)
            log.info("Applied migration %s", p.name)
        return [p.name for p in to_apply]

    # Convenience cursor
    def cursor(self) -> sqlite3.Cursor:
        return self.conn.cursor()

"""SQLite database connection and initialization."""

import logging
import sqlite3
from pathlib import Path

from notekeep.core.config import DATABASE_PATH

logger = logging.getLogger(__name__)

# Migrations directory
MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def _run_migrations(conn: sqlite3.Connection) -> None:
    """Run pending database migrations."""
    conn.execute("""
        CREATE TABLE IF NOT EXISTS _migrations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT UNIQUE NOT NULL,
            applied_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """)

    applied = set(applied_migrations(conn))

    for migration_file in sorted(MIGRATIONS_DIR.glob("*.sql")):
        if migration_file.name in applied:
            continue

        logger.info("Applying migration: %s", migration_file.name)
        conn.executescript(migration_file.read_text())
        conn.execute(
            "INSERT INTO _migrations (name) VALUES (?)",
            (migration_file.name,),
        )
        conn.commit()


def applied_migrations(conn: sqlite3.Connection) -> list[str]:
    """Names of migrations recorded in the database, in order."""
    rows = conn.execute("SELECT name FROM _migrations ORDER BY id").fetchall()
    return [row[0] for row in rows]


def init_db(db_path: Path | str | None = None) -> Path:
    """
    Initialize database with schema and migrations.

    Args:
        db_path: Path to SQLite database (defaults to DATABASE_PATH)

    Returns:
        The resolved database path
    """
    path = Path(db_path) if db_path else DATABASE_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(path)
    try:
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        conn.execute("PRAGMA synchronous=NORMAL")

        _run_migrations(conn)
    finally:
        conn.close()
    return path


def connect(db_path: Path | str | None = None, timeout: float = 10.0) -> sqlite3.Connection:
    """Open a connection with row factory and foreign keys enabled."""
    path = Path(db_path) if db_path else DATABASE_PATH
    conn = sqlite3.connect(path, timeout=timeout, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON")
    return conn

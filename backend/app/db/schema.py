from pathlib import Path

from .database import get_db

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS submissions (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    id TEXT NOT NULL UNIQUE,
    body_json TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_submissions_created_at
    ON submissions (created_at DESC, seq DESC);
"""


def init_db(db_path: str | Path | None = None) -> None:
    conn = get_db(db_path)
    try:
        apply_schema(conn)
    finally:
        conn.close()


def apply_schema(conn) -> None:
    conn.executescript(SCHEMA_SQL)
    _ensure_submissions_columns(conn)
    conn.commit()


def _ensure_submissions_columns(conn) -> None:
    """Add columns that were added after the initial schema deployment."""
    existing = {
        str(row[1])
        for row in conn.execute("PRAGMA table_info(submissions)").fetchall()
        if len(row) > 1
    }
    required_defs = [
        ("updated_at", "TEXT NOT NULL DEFAULT ''"),
    ]
    for column, definition in required_defs:
        if column in existing:
            continue
        conn.execute(f"ALTER TABLE submissions ADD COLUMN {column} {definition}")

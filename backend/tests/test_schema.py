import sqlite3
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.db.database import get_db
from app.db.documents import list_documents
from app.db.schema import init_db

EXPECTED_TABLES = {"submissions"}


def _get_tables(db_path: Path) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ).fetchall()
        return {name for (name,) in rows}
    finally:
        conn.close()


def test_init_db_creates_all_tables(tmp_path: Path):
    db_path = tmp_path / "intake.db"
    init_db(db_path)
    tables = _get_tables(db_path)
    assert EXPECTED_TABLES.issubset(tables)


def test_init_db_is_idempotent(tmp_path: Path):
    db_path = tmp_path / "intake.db"
    init_db(db_path)
    init_db(db_path)
    tables = _get_tables(db_path)
    assert EXPECTED_TABLES.issubset(tables)


def test_init_db_creates_missing_parent_directory(tmp_path: Path):
    db_path = tmp_path / "nested" / "store" / "intake.db"
    init_db(db_path)
    assert db_path.exists()


def test_submissions_table_has_document_columns_and_order_index(tmp_path: Path):
    db_path = tmp_path / "intake.db"
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        columns = {row[1] for row in conn.execute("PRAGMA table_info(submissions)").fetchall()}
        indexes = {row[1] for row in conn.execute("PRAGMA index_list(submissions)").fetchall()}
    finally:
        conn.close()

    assert {"seq", "id", "body_json", "created_at", "updated_at"} <= columns
    assert "idx_submissions_created_at" in indexes


def test_get_db_prepares_schema_on_first_open(tmp_path: Path):
    db_path = tmp_path / "fresh" / "intake.db"
    conn = get_db(db_path)
    try:
        row = conn.execute("SELECT COUNT(*) FROM submissions").fetchone()
    finally:
        conn.close()
    assert row[0] == 0


def test_init_db_backfills_updated_at_on_older_store(tmp_path: Path):
    db_path = tmp_path / "legacy.db"
    conn = sqlite3.connect(db_path)
    conn.execute(
        "CREATE TABLE submissions (seq INTEGER PRIMARY KEY AUTOINCREMENT, "
        "id TEXT NOT NULL UNIQUE, body_json TEXT NOT NULL, created_at TEXT NOT NULL)"
    )
    conn.execute(
        "INSERT INTO submissions (id, body_json, created_at) VALUES (?, ?, ?)",
        ("old", '{"yeshivaName": "A", "goal": NaN}', "2024-01-01T00:00:00.000000Z"),
    )
    conn.commit()
    conn.close()

    init_db(db_path)
    conn = get_db(db_path)
    try:
        documents = list_documents(conn)
    finally:
        conn.close()

    assert documents == [
        {
            "yeshivaName": "A",
            "goal": None,
            "_id": "old",
            "createdAt": "2024-01-01T00:00:00.000000Z",
            "updatedAt": "2024-01-01T00:00:00.000000Z",
        }
    ]

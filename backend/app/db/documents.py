"""Schema-less document collection stored as JSON bodies in SQLite."""

import json
import sqlite3
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

SERVER_FIELDS = ("_id", "createdAt", "updatedAt")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _row_to_document(row: sqlite3.Row) -> dict[str, Any]:
    try:
        # Rows written before NaN/Infinity were refused may still hold them.
        body = json.loads(row["body_json"], parse_constant=lambda _name: None)
    except json.JSONDecodeError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    body["_id"] = row["id"]
    body["createdAt"] = row["created_at"]
    body["updatedAt"] = row["updated_at"] or row["created_at"]
    return body


def insert_document(conn: sqlite3.Connection, document: dict[str, Any]) -> dict[str, Any]:
    body = {key: value for key, value in document.items() if key not in SERVER_FIELDS}
    # Raises ValueError for NaN/Infinity, which JSON responses cannot carry.
    body_json = json.dumps(body, ensure_ascii=False, allow_nan=False)
    doc_id = uuid4().hex
    created_at = _now_iso()
    conn.execute(
        """
        INSERT INTO submissions (id, body_json, created_at, updated_at)
        VALUES (?, ?, ?, ?)
        """,
        (doc_id, body_json, created_at, created_at),
    )
    conn.commit()
    return {**body, "_id": doc_id, "createdAt": created_at, "updatedAt": created_at}


def list_documents(conn: sqlite3.Connection) -> list[dict[str, Any]]:
    rows = conn.execute(
        """
        SELECT id, body_json, created_at, updated_at
        FROM submissions
        ORDER BY created_at DESC, seq DESC
        """
    ).fetchall()
    return [_row_to_document(row) for row in rows]


def count_documents(conn: sqlite3.Connection) -> int:
    row = conn.execute("SELECT COUNT(*) FROM submissions").fetchone()
    return int(row[0]) if row else 0

from pathlib import Path
import sqlite3

from ..config import get_settings

_ready_paths: set[Path] = set()


class StoreUnavailableError(RuntimeError):
    """Raised when the document store cannot be opened."""


def get_db(db_path: str | Path | None = None) -> sqlite3.Connection:
    target = Path(db_path) if db_path is not None else get_settings().store_path
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(target, check_same_thread=False)
    except (OSError, sqlite3.Error) as exc:
        raise StoreUnavailableError(f"Cannot open document store at {target}: {exc}") from exc

    conn.row_factory = sqlite3.Row
    key = target.resolve()
    if key not in _ready_paths:
        # First successful open of this store, including after a failed startup.
        from .schema import apply_schema

        try:
            apply_schema(conn)
        except sqlite3.Error as exc:
            conn.close()
            raise StoreUnavailableError(f"Cannot prepare document store at {target}: {exc}") from exc
        _ready_paths.add(key)
    return conn

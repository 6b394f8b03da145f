import logging
import sqlite3
from datetime import datetime

from fastapi import APIRouter

from ..db.database import StoreUnavailableError, get_db
from ..db.documents import count_documents

router = APIRouter()
logger = logging.getLogger(__name__)


def _store_reachable() -> bool:
    try:
        conn = get_db()
    except StoreUnavailableError:
        return False
    try:
        count_documents(conn)
        return True
    except sqlite3.Error:
        logger.warning("Health check could not query the document store")
        return False
    finally:
        conn.close()


@router.get("/health")
def health_check():
    store_ok = _store_reachable()
    return {
        "status": "ok" if store_ok else "degraded",
        "store": store_ok,
        "timestamp": datetime.utcnow().isoformat(),
    }

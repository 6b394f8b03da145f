import logging
import sqlite3
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from ..db.database import StoreUnavailableError, get_db
from ..db.documents import insert_document, list_documents

router = APIRouter(prefix="/api", tags=["submissions"])
logger = logging.getLogger(__name__)

SUBMIT_OK_MESSAGE = "נשלח בהצלחה!"
SUBMIT_FAILED_MESSAGE = "תקלה בשמירה"
FETCH_FAILED_MESSAGE = "תקלה בטעינת נתונים"
INVALID_BODY_MESSAGE = "נתונים לא תקינים"


@router.post("/submit")
def submit_form(payload: dict[str, Any] = Body(...)):
    try:
        conn = get_db()
    except StoreUnavailableError:
        logger.exception("Document store unavailable while saving submission")
        return JSONResponse(status_code=500, content={"error": SUBMIT_FAILED_MESSAGE})

    try:
        stored = insert_document(conn, payload)
    except ValueError:
        logger.warning("Rejected submission with non-finite numbers")
        return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})
    except sqlite3.Error:
        logger.exception("Failed to save submission")
        return JSONResponse(status_code=500, content={"error": SUBMIT_FAILED_MESSAGE})
    finally:
        conn.close()

    logger.info("New form received (id=%s)", stored["_id"])
    return {"message": SUBMIT_OK_MESSAGE}


@router.get("/all-forms")
def get_all_forms():
    try:
        conn = get_db()
    except StoreUnavailableError:
        logger.exception("Document store unavailable while listing submissions")
        return JSONResponse(status_code=500, content={"error": FETCH_FAILED_MESSAGE})

    try:
        return list_documents(conn)
    except sqlite3.Error:
        logger.exception("Failed to load submissions")
        return JSONResponse(status_code=500, content={"error": FETCH_FAILED_MESSAGE})
    finally:
        conn.close()

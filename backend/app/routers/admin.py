import hmac
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import get_settings

router = APIRouter(prefix="/api", tags=["admin"])
logger = logging.getLogger(__name__)

LOGIN_REJECTED_MESSAGE = "קוד גישה שגוי"


class AdminLoginRequest(BaseModel):
    code: str = ""


def check_admin_code(code: str) -> bool:
    secret = get_settings().admin_code
    if not secret:
        logger.warning("Admin login attempted but ADMIN_CODE is not configured")
        return False
    return hmac.compare_digest(code.encode("utf-8"), secret.encode("utf-8"))


@router.post("/admin-login")
def admin_login(payload: AdminLoginRequest):
    if check_admin_code(payload.code):
        logger.info("Admin login succeeded")
        return {"success": True}

    logger.info("Admin login rejected")
    return JSONResponse(
        status_code=401,
        content={"success": False, "message": LOGIN_REJECTED_MESSAGE},
    )

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parents[1]
DEFAULT_STORE_PATH = BACKEND_DIR / "data" / "intake.db"
DEFAULT_CLIENT_DIST_DIR = BACKEND_DIR.parent / "frontend" / "dist"
DEFAULT_PORT = 3000
REQUIRED_ENV_VARS = ("STORE_PATH", "ADMIN_CODE")

load_dotenv()


@dataclass(frozen=True)
class Settings:
    store_path: Path
    port: int
    admin_code: str | None
    client_dist_dir: Path
    cors_origins: list[str]
    log_level: str


def _resolve_port() -> int:
    raw = os.environ.get("PORT", "").strip()
    if not raw:
        return DEFAULT_PORT
    try:
        parsed = int(raw)
        if parsed > 0:
            return parsed
    except ValueError:
        pass
    logger.warning("Invalid PORT value: %s", raw)
    return DEFAULT_PORT


def _resolve_cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_settings() -> Settings:
    store_path = os.environ.get("STORE_PATH", "").strip()
    dist_dir = os.environ.get("CLIENT_DIST_DIR", "").strip()
    admin_code = os.environ.get("ADMIN_CODE", "").strip()
    return Settings(
        store_path=Path(store_path) if store_path else DEFAULT_STORE_PATH,
        port=_resolve_port(),
        admin_code=admin_code or None,
        client_dist_dir=Path(dist_dir) if dist_dir else DEFAULT_CLIENT_DIST_DIR,
        cors_origins=_resolve_cors_origins(),
        log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def validate_settings() -> list[str]:
    """Log a diagnostic for every required variable that is not set.

    Returns the missing names. Never raises: the server keeps listening and
    the affected requests fail on their own.
    """
    missing = [name for name in REQUIRED_ENV_VARS if not os.environ.get(name, "").strip()]
    for name in missing:
        logger.warning("%s is not set, check your environment or .env file", name)
    if "STORE_PATH" in missing:
        logger.info("Falling back to default store at %s", DEFAULT_STORE_PATH)
    if "ADMIN_CODE" in missing:
        logger.warning("Admin login is disabled until ADMIN_CODE is configured")
    return missing


def configure_logging(level: str | None = None) -> None:
    resolved = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

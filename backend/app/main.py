import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import configure_logging, get_settings, validate_settings
from .db.schema import init_db
from .routers import admin, health, spa, submissions

logger = logging.getLogger(__name__)

app = FastAPI(title="Campaign Intake API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup() -> None:
    validate_settings()
    settings = get_settings()
    try:
        init_db()
        logger.info("Connected to document store at %s", settings.store_path)
    except Exception:
        # Keep listening; requests that need the store will fail with 500.
        logger.exception("Document store bootstrap failed (store=%s)", settings.store_path)


app.include_router(health.router)
app.include_router(submissions.router)
app.include_router(admin.router)
# Must stay last: it matches every GET path.
app.include_router(spa.router)


def run() -> None:
    configure_logging()
    settings = get_settings()
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()

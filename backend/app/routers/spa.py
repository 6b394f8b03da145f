from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from ..config import get_settings

router = APIRouter(tags=["spa"])

INDEX_FILE = "index.html"


def _resolve_static_file(dist_dir: Path, requested: str) -> Path | None:
    if not requested:
        return None
    root = dist_dir.resolve()
    candidate = (root / requested).resolve()
    # Only serve files that live inside the build directory.
    if root not in candidate.parents:
        return None
    return candidate if candidate.is_file() else None


@router.get("/{full_path:path}", include_in_schema=False)
def serve_client(full_path: str):
    if full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not Found")

    dist_dir = get_settings().client_dist_dir
    static_file = _resolve_static_file(dist_dir, full_path)
    if static_file is not None:
        return FileResponse(static_file)

    index = dist_dir / INDEX_FILE
    if not index.is_file():
        raise HTTPException(status_code=404, detail="Client build not found")
    return FileResponse(index)

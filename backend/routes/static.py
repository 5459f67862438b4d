"""Static front end. Registered last so /api routes win."""

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, JSONResponse

from config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _resolve(static_dir: Path, requested: str) -> Path | None:
    """Existing file under static_dir for `requested`, or None. Never escapes static_dir."""
    root = static_dir.resolve()
    candidate = (root / requested).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    return candidate if candidate.is_file() else None


@router.get("/{full_path:path}", include_in_schema=False)
async def front_end(full_path: str):
    """Serve a static asset, or the entry document for any other path."""
    static_dir = settings.static_dir
    asset = _resolve(static_dir, full_path) if full_path else None
    if asset is not None:
        return FileResponse(asset)

    index = static_dir / "index.html"
    if not index.is_file():
        logger.warning("No index.html in %s", static_dir)
        return JSONResponse({"error": "Not found"}, status_code=404)
    return FileResponse(index)

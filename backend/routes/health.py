"""Liveness check route."""

from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health() -> dict:
    """Lightweight liveness check, no store or upstream calls."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

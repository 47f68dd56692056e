"""Liveness endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Returns 200 while the process is up."""
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

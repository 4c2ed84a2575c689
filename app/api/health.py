"""Health check endpoint."""

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

from app.core.config import get_settings

settings = get_settings()

router = APIRouter(tags=["health"])

_started = time.monotonic()


@router.get("/healthz")
async def health_check() -> dict[str, Any]:
    """Liveness check with version and uptime."""
    return {
        "ok": True,
        "version": settings.app_version,
        "uptimeMs": int((time.monotonic() - _started) * 1000),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

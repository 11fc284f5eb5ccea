"""Health check endpoint."""
from __future__ import annotations

import time

from fastapi import APIRouter, Request

from src.shared.constants import APPROVAL_SERVICE_NAME, VERSION

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict:
    """Report liveness and the number of tracked builds."""
    started = getattr(request.app.state, "start_time", time.time())
    return {
        "status": "healthy",
        "service_name": APPROVAL_SERVICE_NAME,
        "version": VERSION,
        "builds": len(request.app.state.runs.build_ids()),
        "uptime_seconds": round(time.time() - started, 3),
    }

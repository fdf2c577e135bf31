"""Health check endpoint."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter

from cv_roaster.core.constants import SERVICE_NAME, SERVICE_VERSION
from cv_roaster.models import HealthResponse

router = APIRouter(tags=["System"])

_start_time = time.monotonic()


@router.get("/api/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        uptime_seconds=round(time.monotonic() - _start_time),
    )

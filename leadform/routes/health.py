# leadform/routes/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter
from pydantic import BaseModel

import leadform
from leadform.core.config import settings

router = APIRouter(tags=["health"])

_STARTED_AT = time.time()


class HealthCheckResponse(BaseModel):
    status: str
    service: str
    environment: str
    version: str
    timestamp: str
    uptime: float
    form: Dict[str, str]


@router.get("/health", response_model=HealthCheckResponse)
async def health() -> HealthCheckResponse:
    """Liveness check. The webhook is not probed; delivery is fire-and-forget."""
    return HealthCheckResponse(
        status="healthy",
        service="leadform",
        environment=settings.environment,
        version=leadform.__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.time() - _STARTED_AT, 3),
        form={
            "form_id": settings.form_id,
            "form_version": settings.form_version,
            "source": settings.form_source,
        },
    )

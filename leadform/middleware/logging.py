# leadform/middleware/logging.py
from __future__ import annotations

import time
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from leadform.core.config import settings
from leadform.core.logging import get_structlog_logger

logger = get_structlog_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging. Health probes are not logged."""

    def __init__(self, app, api_prefix: Optional[str] = None):
        super().__init__(app)
        prefix = settings.api_prefix if api_prefix is None else api_prefix
        self.quiet_paths = frozenset({"/health", prefix.rstrip("/") + "/health"})

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        quiet = request.url.path in self.quiet_paths

        if not quiet:
            logger.info(
                "request.received",
                method=request.method,
                path=request.url.path,
                client_ip=request.client.host if request.client else "unknown",
                user_agent=request.headers.get("user-agent", "unknown"),
            )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request.failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                duration_ms=round((time.time() - start_time) * 1000, 2),
                exc_info=True,
            )
            raise

        response_time = time.time() - start_time
        response.headers["X-Response-Time"] = f"{response_time:.3f}"

        if not quiet:
            logger.info(
                "request.completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(response_time * 1000, 2),
            )

        return response

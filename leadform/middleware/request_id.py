# leadform/middleware/request_id.py
from __future__ import annotations

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from leadform.core.logging import set_request_id


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Binds a request ID into the log context and echoes it back."""

    async def dispatch(self, request: Request, call_next):
        request_id = self._get_or_create_request_id(request)
        set_request_id(request_id)
        request.state.request_id = request_id

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        return response

    def _get_or_create_request_id(self, request: Request) -> str:
        request_id = request.headers.get("X-Request-ID")
        if request_id:
            return request_id

        correlation_id = request.headers.get("X-Correlation-ID")
        if correlation_id:
            return correlation_id

        return str(uuid.uuid4())

# leadform/schemas/__init__.py
"""
Pydantic schemas for the outbound payload and the HTTP request/response bodies.
"""

from leadform.schemas.form import FormSubmitRequest, FormSubmitResponse
from leadform.schemas.payload import OutboundPayload

__all__ = [
    "FormSubmitRequest",
    "FormSubmitResponse",
    "OutboundPayload",
]

# leadform/services/__init__.py
"""
Form handling services: masking, validation, tracking capture and submission.
"""

from leadform.services.phone_mask import PhoneMask, apply_mask, digits_only
from leadform.services.submission import (
    SubmissionOrchestrator,
    SubmissionOutcome,
    SubmissionState,
)
from leadform.services.transport import TransportResult, WebhookTransport
from leadform.services.validation import (
    FieldValidationResult,
    validate_consent,
    validate_email,
    validate_name,
    validate_phone,
)

__all__ = [
    # Phone mask
    "PhoneMask",
    "apply_mask",
    "digits_only",
    # Validation
    "FieldValidationResult",
    "validate_consent",
    "validate_email",
    "validate_name",
    "validate_phone",
    # Submission
    "SubmissionOrchestrator",
    "SubmissionOutcome",
    "SubmissionState",
    "TransportResult",
    "WebhookTransport",
]

from __future__ import annotations

from typing import Any, Dict, Optional


class BaseFormException(Exception):
    """Base exception for all form handler errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class FieldValidationError(BaseFormException):
    """One or more form fields failed validation."""
    def __init__(self, message: str = "Validation error", **kwargs):
        super().__init__(message, status_code=422, **kwargs)


class UnknownFieldError(BaseFormException):
    """Field name is not part of the form."""
    def __init__(self, message: str = "Unknown form field", **kwargs):
        super().__init__(message, status_code=404, **kwargs)


class SubmissionInProgressError(BaseFormException):
    """A submission is already in flight for this form."""
    def __init__(self, message: str = "Submission already in progress", **kwargs):
        super().__init__(message, status_code=409, **kwargs)

# leadform/core/__init__.py
"""
Core package for configuration, logging, and shared exceptions.
"""

from leadform.core.config import FormConfig, Settings, settings
from leadform.core.logging import configure_structlog, get_structlog_logger

__all__ = [
    "FormConfig",
    "Settings",
    "settings",
    "configure_structlog",
    "get_structlog_logger",
]

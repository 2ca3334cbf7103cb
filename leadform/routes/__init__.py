# leadform/routes/__init__.py
"""
HTTP route handlers.
"""

from leadform.routes.form import router as form_router
from leadform.routes.health import router as health_router

__all__ = [
    "form_router",
    "health_router",
]

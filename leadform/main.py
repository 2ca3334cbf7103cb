# leadform/main.py
from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import leadform
from leadform.core.config import settings
from leadform.core.exceptions import BaseFormException
from leadform.core.logging import configure_structlog, get_structlog_logger
from leadform.middleware.logging import LoggingMiddleware
from leadform.middleware.request_id import RequestIdMiddleware
from leadform.routes import form, health


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(
        "application.started",
        environment=settings.environment,
        webhook_url=settings.webhook_url,
        form_id=settings.form_id,
    )
    yield
    logger.info("application.shutdown_complete")


# Configure logging before creating app
configure_structlog()
logger = get_structlog_logger(__name__)

app = FastAPI(
    title="Landing Page Form API",
    version=leadform.__version__,
    description="Phone masking, field validation and webhook submission for the landing-page form",
    docs_url="/docs" if settings.is_development else None,
    redoc_url=None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)

# The landing page is served from another origin and posts here directly
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)
app.add_middleware(LoggingMiddleware, api_prefix=settings.api_prefix)
app.add_middleware(RequestIdMiddleware)


@app.exception_handler(BaseFormException)
async def form_exception_handler(request: Request, exc: BaseFormException):
    """Handle form handler exceptions."""
    logger.warning(
        "api.exception",
        status_code=exc.status_code,
        code=exc.code,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies (as opposed to invalid field values)."""
    errors = []
    for error in exc.errors():
        errors.append({
            "loc": list(error.get("loc", [])),
            "msg": error.get("msg", "Validation error"),
            "type": error.get("type", "value_error"),
        })

    logger.warning(
        "validation.error",
        path=request.url.path,
        method=request.method,
        errors=errors,
    )
    return JSONResponse(
        status_code=422,
        content={
            "code": "request_validation_error",
            "message": "Request validation failed",
            "details": {"errors": errors},
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    error_id = f"err_{int(time.time())}_{hash(str(exc)) % 10000:04d}"

    logger.error(
        "unhandled.exception",
        error_id=error_id,
        error_type=type(exc).__name__,
        error=str(exc),
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )

    message = f"Internal server error: {exc}" if settings.is_development else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"code": "internal_error", "message": message, "details": {"error_id": error_id}},
        headers={"X-Error-ID": error_id},
    )


app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(form.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Landing Page Form API",
        "version": app.version,
        "environment": settings.environment,
        "health": f"{settings.api_prefix}/health",
        "submit": f"{settings.api_prefix}/form/submit",
    }

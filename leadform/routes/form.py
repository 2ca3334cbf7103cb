# leadform/routes/form.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from leadform.core.config import FormConfig, settings
from leadform.core.exceptions import FieldValidationError, UnknownFieldError
from leadform.schemas.form import (
    FieldValidationOut,
    FieldValueIn,
    FormSubmitRequest,
    FormSubmitResponse,
    PageContextIn,
    PhoneMaskOut,
)
from leadform.services.form_view import InMemoryFormView, RawFormValues
from leadform.services.phone_mask import PhoneMask
from leadform.services.submission import SubmissionOrchestrator
from leadform.services.tracking import PageContext, PageTrackingSource, primary_language
from leadform.services.transport import Transport, WebhookTransport
from leadform.services.validation import FIELDS, validate_field

router = APIRouter(prefix="/form", tags=["form"])

_TRUTHY = {"true", "1", "on", "yes"}


def get_form_config() -> FormConfig:
    return FormConfig.from_settings(settings)


def get_transport(config: FormConfig = Depends(get_form_config)) -> Transport:
    return WebhookTransport(config.webhook_url, timeout=config.webhook_timeout_seconds)


def page_context_from_request(request: Request, page: PageContextIn) -> PageContext:
    """
    Prefer what the browser reported; fall back to request headers.
    The page that posted the form is the Referer, not the page's own referrer.
    """
    return PageContext(
        url=page.url or request.headers.get("referer", ""),
        referrer=page.referrer,
        title=page.title,
        user_agent=page.user_agent or request.headers.get("user-agent", ""),
        language=page.language or primary_language(request.headers.get("accept-language")),
        screen_width=page.screen_width,
        screen_height=page.screen_height,
        viewport_width=page.viewport_width,
        viewport_height=page.viewport_height,
    )


@router.get("/phone-mask", response_model=PhoneMaskOut)
async def mask_phone(
    value: str = Query(default="", max_length=64),
    cursor: Optional[int] = Query(default=None, ge=0),
    config: FormConfig = Depends(get_form_config),
) -> PhoneMaskOut:
    """Keystroke masking for the phone control."""
    mask = PhoneMask(country_code=config.country_code)
    masked = mask.on_input(value, len(value) if cursor is None else cursor)
    return PhoneMaskOut(
        value=masked.value,
        digits=mask.digits_only(masked.value),
        cursor=masked.cursor,
        blocks_backspace=mask.blocks_backspace(masked.cursor),
    )


@router.post("/validate/{field}", response_model=FieldValidationOut)
async def validate_single_field(
    field: str,
    body: FieldValueIn,
    config: FormConfig = Depends(get_form_config),
) -> FieldValidationOut:
    """Blur validation of one control."""
    if field not in FIELDS:
        raise UnknownFieldError(f"Unknown form field: {field}", details={"fields": list(FIELDS)})

    value = body.value
    if field == "consent":
        value = value if isinstance(value, bool) else value.strip().lower() in _TRUTHY
    elif isinstance(value, bool):
        value = ""

    result = validate_field(field, value, country_code=config.country_code)
    return FieldValidationOut(field=field, valid=result.valid, message=result.message)


@router.post("/submit", response_model=FormSubmitResponse)
async def submit_form(
    body: FormSubmitRequest,
    request: Request,
    config: FormConfig = Depends(get_form_config),
    transport: Transport = Depends(get_transport),
) -> FormSubmitResponse:
    view = InMemoryFormView(
        values=RawFormValues(
            name=body.name,
            email=body.email,
            phone=body.phone,
            accepted_policy=body.accepted_policy,
        )
    )
    orchestrator = SubmissionOrchestrator(
        config=config,
        view=view,
        tracking=PageTrackingSource(page_context_from_request(request, body.page)),
        transport=transport,
    )

    outcome = await orchestrator.submit()
    if not outcome.succeeded:
        raise FieldValidationError(
            config.invalid_form_message,
            code="invalid_fields",
            details={"errors": outcome.errors},
        )

    return FormSubmitResponse(status="success", redirect=outcome.redirect_url)

"""
Submit flow for the landing-page form.

Webhook delivery is fire-and-forget: whatever the transport reports, the user
is sent on to the follow-up page. Failed deliveries show up only in the logs
and are never retried.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from leadform.core.config import FormConfig
from leadform.core.exceptions import SubmissionInProgressError
from leadform.core.logging import get_structlog_logger
from leadform.schemas.payload import FormSnapshot, OutboundPayload, TrackingSnapshot
from leadform.services.form_view import FormView
from leadform.services.payload import build_payload, snapshot_form
from leadform.services.phone_mask import MaskedInput, PhoneMask
from leadform.services.tracking import TrackingDataSource
from leadform.services.transport import Transport, TransportResult
from leadform.services.validation import FIELDS, FieldValidationResult, validate_field

logger = get_structlog_logger(__name__)


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmissionOutcome:
    state: SubmissionState
    errors: Dict[str, str] = field(default_factory=dict)
    payload: Optional[OutboundPayload] = None
    delivery: Optional[TransportResult] = None
    redirect_url: Optional[str] = None
    transitions: Tuple[SubmissionState, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.state is SubmissionState.SUCCESS


class SubmissionOrchestrator:
    def __init__(
        self,
        *,
        config: FormConfig,
        view: FormView,
        tracking: TrackingDataSource,
        transport: Transport,
    ):
        self.config = config
        self.view = view
        self.tracking = tracking
        self.transport = transport
        self.phone_mask = PhoneMask(country_code=config.country_code)
        self._state = SubmissionState.IDLE
        self._transitions: List[SubmissionState] = []

    @property
    def state(self) -> SubmissionState:
        return self._state

    def _transition(self, new_state: SubmissionState) -> None:
        logger.debug("submission.state_changed", old=self._state.value, new=new_state.value)
        self._state = new_state
        self._transitions.append(new_state)

    # Field-level behaviour

    def phone_input(self, value: str, cursor: int) -> MaskedInput:
        return self.phone_mask.on_input(value, cursor)

    def field_edited(self, field_name: str) -> None:
        self.view.clear_error(field_name)

    def _check_field(self, field_name: str) -> FieldValidationResult:
        values = self.view.read_values().as_field_map()
        result = validate_field(field_name, values[field_name], country_code=self.config.country_code)
        if result.valid:
            self.view.clear_error(field_name)
        else:
            self.view.mark_error(field_name, result.message)
        return result

    def validate_field(self, field_name: str) -> bool:
        return self._check_field(field_name).valid

    def _validate_all(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for field_name in FIELDS:
            result = self._check_field(field_name)
            if not result.valid:
                errors[field_name] = result.message
        return errors

    def validate_all(self) -> bool:
        return not self._validate_all()

    # Submission

    def build_payload(self, form: FormSnapshot, tracking: TrackingSnapshot) -> OutboundPayload:
        return build_payload(form=form, tracking=tracking, config=self.config)

    async def _deliver(self, payload: OutboundPayload) -> TransportResult:
        try:
            result = await self.transport.send(payload)
        except Exception as e:
            logger.error(
                "webhook.delivery_error",
                url=self.config.webhook_url,
                error=str(e),
                exc_info=True,
            )
            return TransportResult(delivered=False, error_message=str(e)[:200])

        if not result.delivered:
            logger.warning(
                "webhook.delivery_failed",
                url=self.config.webhook_url,
                http_status=result.http_status,
                error=result.error_message,
            )
        return result

    def _finish(self, **kwargs) -> SubmissionOutcome:
        outcome = SubmissionOutcome(transitions=tuple(self._transitions), **kwargs)
        self._state = SubmissionState.IDLE
        self._transitions = []
        return outcome

    async def submit(self) -> SubmissionOutcome:
        if self._state is not SubmissionState.IDLE:
            raise SubmissionInProgressError(details={"state": self._state.value})

        self._transitions = [SubmissionState.IDLE]
        self._transition(SubmissionState.VALIDATING)

        errors = self._validate_all()
        if errors:
            self._transition(SubmissionState.FAILED)
            self._transition(SubmissionState.IDLE)
            logger.info("submission.invalid", fields=sorted(errors))
            self.view.alert(self.config.invalid_form_message)
            return self._finish(state=SubmissionState.FAILED, errors=errors)

        self._transition(SubmissionState.SUBMITTING)
        self.view.set_loading(True)
        try:
            form = snapshot_form(self.view.read_values())
            payload = self.build_payload(form, self.tracking.capture())
            logger.debug("submission.payload_built", payload=payload.to_json_dict())
            delivery = await self._deliver(payload)
        except BaseException:
            self._state = SubmissionState.IDLE
            self._transitions = []
            raise
        finally:
            self.view.set_loading(False)

        self._transition(SubmissionState.SUCCESS)
        self._transition(SubmissionState.IDLE)
        logger.info(
            "submission.completed",
            form_id=self.config.form_id,
            delivered=delivery.delivered,
            redirect_url=self.config.redirect_url,
        )
        self.view.navigate(self.config.redirect_url)
        return self._finish(
            state=SubmissionState.SUCCESS,
            payload=payload,
            delivery=delivery,
            redirect_url=self.config.redirect_url,
        )

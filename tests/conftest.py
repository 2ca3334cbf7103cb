from typing import List

import pytest

from leadform.core.config import FormConfig
from leadform.schemas.payload import OutboundPayload
from leadform.services.form_view import InMemoryFormView, RawFormValues
from leadform.services.payload import build_payload, snapshot_form
from leadform.services.tracking import PageContext, PageTrackingSource
from leadform.services.transport import TransportResult

LANDING_URL = (
    "https://lp.example.com.br/fast-friday"
    "?utm_source=instagram&utm_medium=social&utm_campaign=black-friday&utm_term=&gclid=abc123"
)

VALID_VALUES = RawFormValues(
    name="Ana Souza",
    email="  Ana.Souza@Example.COM ",
    phone="+55 (11) 98765-4321",
    accepted_policy=True,
)


class RecordingTransport:
    def __init__(self, result: TransportResult = TransportResult(delivered=True, http_status=200)):
        self.result = result
        self.sent: List[OutboundPayload] = []

    async def send(self, payload: OutboundPayload) -> TransportResult:
        self.sent.append(payload)
        return self.result


class FailingTransport:
    def __init__(self, exc: Exception):
        self.exc = exc
        self.calls = 0

    async def send(self, payload: OutboundPayload) -> TransportResult:
        self.calls += 1
        raise self.exc


@pytest.fixture
def form_config() -> FormConfig:
    return FormConfig(webhook_url="https://hooks.example.com/webhook/lp-fast-friday")


@pytest.fixture
def page_context() -> PageContext:
    return PageContext(
        url=LANDING_URL,
        referrer="https://www.instagram.com/",
        title="Fast Friday - Grupo VIP",
        user_agent="Mozilla/5.0 (X11; Linux x86_64)",
        language="pt-BR",
        screen_width=1920,
        screen_height=1080,
        viewport_width=1280,
        viewport_height=720,
    )


@pytest.fixture
def tracking(page_context: PageContext) -> PageTrackingSource:
    return PageTrackingSource(page_context)


@pytest.fixture
def view() -> InMemoryFormView:
    return InMemoryFormView(values=VALID_VALUES)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def sample_payload(form_config: FormConfig, tracking: PageTrackingSource) -> OutboundPayload:
    return build_payload(
        form=snapshot_form(VALID_VALUES),
        tracking=tracking.capture(),
        config=form_config,
    )


@pytest.fixture
def valid_values() -> RawFormValues:
    return VALID_VALUES

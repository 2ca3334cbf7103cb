import pytest
from fastapi.testclient import TestClient

from leadform.main import app
from leadform.routes.form import get_transport

from conftest import LANDING_URL, RecordingTransport

VALID_FORM = {
    "name": "Ana Souza",
    "email": "Ana.Souza@Example.com",
    "phone": "+55 (11) 98765-4321",
    "acceptedPolicy": True,
    "page": {
        "url": LANDING_URL,
        "referrer": "https://www.instagram.com/",
        "title": "Fast Friday - Grupo VIP",
        "screenWidth": 390,
        "screenHeight": 844,
        "viewportWidth": 390,
        "viewportHeight": 664,
    },
}


@pytest.fixture
def webhook():
    transport = RecordingTransport()
    app.dependency_overrides[get_transport] = lambda: transport
    yield transport
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["form"]["form_id"] == "fast-friday-whatsapp-group"


def test_request_id_is_echoed(client):
    response = client.get("/api/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_phone_mask(client):
    response = client.get("/api/form/phone-mask", params={"value": "11987654321"})
    assert response.status_code == 200
    assert response.json() == {
        "value": "+55 (11) 98765-4321",
        "digits": "5511987654321",
        "cursor": 19,
        "blocksBackspace": False,
    }


def test_phone_mask_empty_value(client):
    response = client.get("/api/form/phone-mask", params={"value": ""})
    body = response.json()
    assert body["value"] == "+55"
    assert body["blocksBackspace"] is True


def test_validate_field(client):
    response = client.post("/api/form/validate/email", json={"value": "user@@x"})
    assert response.status_code == 200
    assert response.json() == {"field": "email", "valid": False, "message": "E-mail inválido"}

    response = client.post("/api/form/validate/consent", json={"value": True})
    assert response.json()["valid"] is True

    response = client.post("/api/form/validate/name", json={"value": "Ana"})
    assert response.json()["valid"] is True


def test_validate_unknown_field(client):
    response = client.post("/api/form/validate/age", json={"value": "42"})
    assert response.status_code == 404
    assert response.json()["code"] == "UnknownFieldError"


def test_submit_success(client, webhook):
    response = client.post(
        "/api/form/submit",
        json=VALID_FORM,
        headers={"User-Agent": "Mozilla/5.0 (iPhone)", "Accept-Language": "pt-BR,pt;q=0.9"},
    )
    assert response.status_code == 200
    assert response.json() == {"status": "success", "redirect": "redirect.html"}

    assert len(webhook.sent) == 1
    body = webhook.sent[0].to_json_dict()
    assert body["form"]["email"] == "ana.souza@example.com"
    assert body["tracking"]["utm"]["utm_source"] == "instagram"
    assert body["tracking"]["page"]["userAgent"] == "Mozilla/5.0 (iPhone)"
    assert body["tracking"]["page"]["language"] == "pt-BR"
    assert body["tracking"]["page"]["screenResolution"] == "390x844"


def test_submit_falls_back_to_referer(client, webhook):
    payload = {key: value for key, value in VALID_FORM.items() if key != "page"}
    response = client.post(
        "/api/form/submit",
        json=payload,
        headers={"Referer": "https://lp.example.com.br/?utm_source=google&utm_medium=cpc"},
    )
    assert response.status_code == 200

    body = webhook.sent[0].to_json_dict()
    assert body["tracking"]["utm"] == {"utm_source": "google", "utm_medium": "cpc"}
    assert body["tracking"]["page"]["hostname"] == "lp.example.com.br"
    assert body["tracking"]["page"]["referrer"] is None


def test_submit_without_consent(client, webhook):
    payload = dict(VALID_FORM, acceptedPolicy=False)
    response = client.post("/api/form/submit", json=payload)

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "invalid_fields"
    assert body["message"] == "Por favor, preencha todos os campos corretamente."
    assert body["details"]["errors"] == {"consent": "Você deve aceitar a política de privacidade"}
    assert webhook.sent == []


def test_submit_malformed_body(client, webhook):
    response = client.post("/api/form/submit", json={"name": ["not", "a", "string"]})
    assert response.status_code == 422
    assert response.json()["code"] == "request_validation_error"
    assert webhook.sent == []

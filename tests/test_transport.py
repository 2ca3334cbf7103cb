import pytest
from aiohttp import test_utils, web

from leadform.services.transport import WebhookTransport


def _webhook_app(received, status=200, text="ok"):
    async def handler(request):
        received["content_type"] = request.headers.get("Content-Type")
        received["body"] = await request.json()
        return web.Response(status=status, text=text)

    app = web.Application()
    app.router.add_post("/webhook/lp-fast-friday", handler)
    return app


@pytest.mark.asyncio
async def test_webhook_transport_posts_json(sample_payload):
    received = {}
    async with test_utils.TestServer(_webhook_app(received)) as server:
        transport = WebhookTransport(str(server.make_url("/webhook/lp-fast-friday")))
        result = await transport.send(sample_payload)

    assert result.delivered is True
    assert result.http_status == 200
    assert result.error_message is None
    assert received["content_type"] == "application/json"
    assert received["body"] == sample_payload.to_json_dict()
    assert received["body"]["metadata"]["formId"] == "fast-friday-whatsapp-group"


@pytest.mark.asyncio
async def test_webhook_transport_reports_http_error(sample_payload):
    received = {}
    async with test_utils.TestServer(_webhook_app(received, status=500, text="workflow crashed")) as server:
        transport = WebhookTransport(str(server.make_url("/webhook/lp-fast-friday")))
        result = await transport.send(sample_payload)

    assert result.delivered is False
    assert result.http_status == 500
    assert result.error_message == "HTTP 500: workflow crashed"


@pytest.mark.asyncio
async def test_webhook_transport_reports_connection_error(sample_payload):
    transport = WebhookTransport("http://127.0.0.1:1/webhook/lp-fast-friday", timeout=5)
    result = await transport.send(sample_payload)

    assert result.delivered is False
    assert result.http_status is None
    assert result.error_message.startswith("Client error")

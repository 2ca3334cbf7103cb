from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Optional, Protocol

import aiohttp

from leadform.core.logging import get_structlog_logger
from leadform.schemas.payload import OutboundPayload

logger = get_structlog_logger(__name__)


@dataclass(frozen=True)
class TransportResult:
    delivered: bool
    http_status: Optional[int] = None
    error_message: Optional[str] = None


class Transport(Protocol):
    async def send(self, payload: OutboundPayload) -> TransportResult:
        ...


class WebhookTransport:
    """
    POSTs the payload as JSON to a fixed webhook URL.
    Network failures are reported in the result rather than raised.
    """

    def __init__(self, url: str, timeout: Optional[float] = None):
        self.url = url
        self.timeout = timeout

    async def send(self, payload: OutboundPayload) -> TransportResult:
        body = json.dumps(payload.to_json_dict())
        headers = {
            "Content-Type": "application/json",
        }

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.url,
                    data=body,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    status = response.status
                    if 200 <= status < 300:
                        logger.info("webhook.delivered", url=self.url, http_status=status)
                        return TransportResult(delivered=True, http_status=status)
                    error_text = await response.text()
                    return TransportResult(
                        delivered=False,
                        http_status=status,
                        error_message=f"HTTP {status}: {error_text[:200]}",
                    )
        except asyncio.TimeoutError:
            return TransportResult(delivered=False, error_message="Request timeout")
        except aiohttp.ClientError as e:
            return TransportResult(delivered=False, error_message=f"Client error: {str(e)[:200]}")

"""Page and UTM tracking capture."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol
from urllib.parse import parse_qsl, urlsplit

from leadform.schemas.payload import PageData, TrackingSnapshot

UTM_KEYS = ("utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content")


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing ``Z``."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_url_params(url: str) -> Dict[str, str]:
    """Every query-string pair of ``url``; a repeated key keeps its last value."""
    params: Dict[str, str] = {}
    for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
        params[key] = value
    return params


def filter_utm_params(params: Dict[str, str]) -> Dict[str, str]:
    return {key: params[key] for key in UTM_KEYS if params.get(key)}


def _dimensions(width: Optional[int], height: Optional[int]) -> str:
    if width is None or height is None:
        return ""
    return f"{width}x{height}"


class TrackingDataSource(Protocol):
    def capture(self) -> TrackingSnapshot:
        ...


@dataclass(frozen=True)
class PageContext:
    """Browser-ambient state as reported by the landing page."""

    url: str = ""
    referrer: Optional[str] = None
    title: str = ""
    user_agent: str = ""
    language: str = ""
    screen_width: Optional[int] = None
    screen_height: Optional[int] = None
    viewport_width: Optional[int] = None
    viewport_height: Optional[int] = None


class PageTrackingSource:
    """Builds a fresh TrackingSnapshot from a PageContext on every capture."""

    def __init__(self, context: PageContext):
        self.context = context

    def capture(self) -> TrackingSnapshot:
        ctx = self.context
        url_params = parse_url_params(ctx.url)
        parts = urlsplit(ctx.url)
        page = PageData(
            url=ctx.url,
            pathname=parts.path,
            hostname=parts.hostname or "",
            referrer=ctx.referrer or None,
            title=ctx.title,
            timestamp=utc_timestamp(),
            user_agent=ctx.user_agent,
            language=ctx.language,
            screen_resolution=_dimensions(ctx.screen_width, ctx.screen_height),
            viewport=_dimensions(ctx.viewport_width, ctx.viewport_height),
        )
        return TrackingSnapshot(
            utm=filter_utm_params(url_params),
            url_params=url_params,
            page=page,
        )


def primary_language(accept_language: Optional[str]) -> str:
    """First tag of an ``Accept-Language`` header, e.g. ``pt-BR``."""
    if not accept_language:
        return ""
    return accept_language.split(",")[0].split(";")[0].strip()

# leadform/schemas/payload.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Snapshot(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class FormSnapshot(_Snapshot):
    name: str
    email: str
    phone: str
    phone_raw: str
    accepted_policy: bool


class PageData(_Snapshot):
    url: str = ""
    pathname: str = ""
    hostname: str = ""
    referrer: Optional[str] = None
    title: str = ""
    timestamp: str
    user_agent: str = ""
    language: str = ""
    screen_resolution: str = ""
    viewport: str = ""


class TrackingSnapshot(_Snapshot):
    utm: Dict[str, str] = Field(default_factory=dict)
    url_params: Dict[str, str] = Field(default_factory=dict)
    page: PageData


class PayloadMetadata(_Snapshot):
    form_id: str
    form_version: str
    source: str


class OutboundPayload(_Snapshot):
    timestamp: str
    form: FormSnapshot
    tracking: TrackingSnapshot
    metadata: PayloadMetadata

    def to_json_dict(self) -> Dict[str, Any]:
        """Wire shape posted to the webhook."""
        return self.model_dump(mode="json", by_alias=True)

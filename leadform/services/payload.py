from __future__ import annotations

from datetime import datetime
from typing import Optional

from leadform.core.config import FormConfig
from leadform.schemas.payload import FormSnapshot, OutboundPayload, PayloadMetadata, TrackingSnapshot
from leadform.services.form_view import RawFormValues
from leadform.services.phone_mask import digits_only
from leadform.services.tracking import utc_timestamp


def snapshot_form(values: RawFormValues) -> FormSnapshot:
    """
    Freeze the live control values the way they are sent to the webhook.
    """
    return FormSnapshot(
        name=values.name.strip(),
        email=values.email.strip().lower(),
        phone=values.phone.strip(),
        phone_raw=digits_only(values.phone),
        accepted_policy=bool(values.accepted_policy),
    )


def build_payload(
    *,
    form: FormSnapshot,
    tracking: TrackingSnapshot,
    config: FormConfig,
    now: Optional[datetime] = None,
) -> OutboundPayload:
    """
    Assemble the outbound webhook payload.
    Deterministic for the same snapshots apart from the timestamp.
    """
    return OutboundPayload(
        timestamp=utc_timestamp(now),
        form=form,
        tracking=tracking,
        metadata=PayloadMetadata(
            form_id=config.form_id,
            form_version=config.form_version,
            source=config.source,
        ),
    )

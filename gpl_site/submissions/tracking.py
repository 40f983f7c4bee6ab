"""Public status lookup by reference number.

Only the kind, type, status and timestamps are exposed: the reference number
is shared over the phone, so it must not unlock personal data.
"""

import re
from datetime import datetime
from typing import Optional

from sqlalchemy import select

from gpl_site.models import ServiceRequest, ServiceRequestType, SubmissionStatus
from gpl_site.schemas import CamelModel
from gpl_site.store import Store

REFERENCE_PATTERN = re.compile(r"^(SR|OUT|SL)-[A-Z0-9]+$")


class RequestStatusView(CamelModel):
    reference_number: str
    kind: str
    type: ServiceRequestType
    status: SubmissionStatus
    created_at: datetime
    updated_at: datetime


async def lookup_reference(store: Store, reference: str) -> Optional[RequestStatusView]:
    """Find a tracked request by the code quoted to the citizen."""
    reference = reference.strip().upper()
    if not REFERENCE_PATTERN.match(reference):
        return None
    
    row = await store.fetch_one(
        select(ServiceRequest)
        .where(ServiceRequest.reference_number == reference)
        .order_by(ServiceRequest.created_at.desc())
    )
    if row is None:
        return None
    return RequestStatusView(
        reference_number=row.reference_number,
        kind=row.report_kind,
        type=row.type,
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )

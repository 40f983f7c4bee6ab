import uuid

import pytest

from gpl_site.errors import PersistenceError
from gpl_site.models import ContactMethod, ServiceRequest, ServiceRequestType, SubmissionStatus
from gpl_site.submissions import FailureKind, SubmissionKind, SubmissionPipeline


class FakeStore:
    """Records inserted rows instead of writing them."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.rows = []

    async def insert(self, record):
        if self.fail:
            raise PersistenceError("connection refused")
        record.id = uuid.uuid4()
        self.rows.append(record)
        return record


OUTAGE = {
    "name": "Kevin Adams",
    "phone": "592-622-0001",
    "address": "45 Sheriff Street, Campbellville",
    "affectedArea": "Campbellville",
    "description": "Whole street has been without power since 6 PM.",
}


@pytest.mark.asyncio
async def test_outage_row_shape():
    store = FakeStore()
    result = await SubmissionPipeline(store).submit(SubmissionKind.OUTAGE, {**OUTAGE, "hazardPresent": True})

    assert result.success
    row = store.rows[0]
    assert isinstance(row, ServiceRequest)
    assert row.type == ServiceRequestType.OTHER
    assert row.email is None
    assert row.preferred_contact_method == ContactMethod.PHONE
    assert row.status == SubmissionStatus.PENDING
    assert row.reference_number == result.reference_number
    assert row.details == {
        "kind": "outage",
        "affected_area": "Campbellville",
        "description": OUTAGE["description"],
        "hazard_present": True,
    }
    assert result.emergency_note


@pytest.mark.asyncio
async def test_invalid_payload_writes_nothing():
    store = FakeStore()
    result = await SubmissionPipeline(store).submit(SubmissionKind.OUTAGE, {**OUTAGE, "phone": "123"})

    assert not result.success
    assert result.failure == FailureKind.VALIDATION
    assert [e.field for e in result.errors] == ["phone"]
    assert result.reference_number is None
    assert store.rows == []


@pytest.mark.asyncio
async def test_persistence_failure_hides_reference():
    result = await SubmissionPipeline(FakeStore(fail=True), hotline="0475").submit(SubmissionKind.OUTAGE, OUTAGE)

    assert not result.success
    assert result.failure == FailureKind.PERSISTENCE
    assert result.reference_number is None
    assert "0475" in result.message
    assert "failure" not in result.to_json()


@pytest.mark.asyncio
async def test_hotline_is_configurable():
    result = await SubmissionPipeline(FakeStore(), hotline="911").submit(
        SubmissionKind.OUTAGE, {**OUTAGE, "hazardPresent": True}
    )
    assert "911" in result.emergency_note


@pytest.mark.asyncio
async def test_feedback_has_no_reference_or_id():
    store = FakeStore()
    result = await SubmissionPipeline(store).submit_feedback(
        {"type": "complaint", "message": "Bill arrived two weeks late.", "rating": 2}
    )
    assert result.success
    assert result.id is None
    assert result.reference_number is None
    assert store.rows[0].rating == 2


@pytest.mark.asyncio
async def test_thousand_service_requests_get_unique_references():
    store = FakeStore()
    pipeline = SubmissionPipeline(store)
    payload = {
        "type": "meter_issue",
        "name": "Ravi Singh",
        "email": "ravi.singh@gmail.com",
        "phone": "592-600-1234",
        "address": "12 Main Street, Georgetown",
        "details": "Meter display is blank since Monday.",
    }
    references = [(await pipeline.submit_service_request(payload)).reference_number for _ in range(1000)]
    assert len(set(references)) == 1000
    assert all(r.startswith("SR-") for r in references)

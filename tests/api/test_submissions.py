import re
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select

from gpl_site.errors import PersistenceError
from gpl_site.models import ContactSubmission, Feedback, ServiceRequest, SubmissionStatus

REFERENCE_RE = re.compile(r"^(SR|OUT|SL)-[A-Z0-9]+$")

CONTACT = {
    "name": "Asha Persaud",
    "email": "asha.persaud@gmail.com",
    "phone": "",
    "subject": "Meter reading query",
    "message": "My last bill shows an estimated reading, please advise.",
}

SERVICE_REQUEST = {
    "type": "new_connection",
    "name": "Ravi Singh",
    "email": "ravi.singh@gmail.com",
    "phone": "592-600-1234",
    "address": "12 Main Street, Georgetown",
    "accountNumber": "",
    "details": "New house needs a 100A residential connection.",
}

OUTAGE = {
    "name": "Kevin Adams",
    "phone": "592-622-0001",
    "address": "45 Sheriff Street, Campbellville",
    "affectedArea": "Campbellville",
    "description": "Whole street has been without power since 6 PM.",
}

STREETLIGHT = {
    "reporterName": "Maria Fernandes",
    "reporterPhone": "592-611-9876",
    "poleNumber": "P-114",
    "location": "Corner of Vlissengen Road and Lamaha Street",
    "issueType": "daylight_burning",
}


async def count(db_session, model) -> int:
    return (await db_session.execute(select(func.count()).select_from(model))).scalar()


@pytest.mark.asyncio
async def test_contact_submission_is_stored(client, db_session):
    resp = await client.post("/api/contact", json=CONTACT)
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["id"]
    assert "referenceNumber" not in data

    row = (await db_session.execute(select(ContactSubmission))).scalar_one()
    assert row.email == CONTACT["email"]
    assert row.phone is None
    assert row.status == SubmissionStatus.PENDING


@pytest.mark.asyncio
@pytest.mark.parametrize("message", ["", "too short", "x" * 9])
async def test_contact_with_short_message_is_rejected(client, db_session, message):
    resp = await client.post("/api/contact", json={**CONTACT, "message": message})
    assert resp.status_code == 400
    data = resp.json()
    assert data["success"] is False
    assert any(e["field"] == "message" for e in data["errors"])
    assert await count(db_session, ContactSubmission) == 0


@pytest.mark.asyncio
async def test_contact_with_bad_email_is_rejected(client, db_session):
    resp = await client.post("/api/contact", json={**CONTACT, "email": "not-an-email"})
    assert resp.status_code == 400
    assert [e["field"] for e in resp.json()["errors"]] == ["email"]
    assert await count(db_session, ContactSubmission) == 0


@pytest.mark.asyncio
async def test_service_request_end_to_end(client, db_session):
    resp = await client.post("/api/service-request", json=SERVICE_REQUEST)
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["referenceNumber"].startswith("SR-")
    assert REFERENCE_RE.match(data["referenceNumber"])
    assert data["referenceNumber"] in data["message"]
    assert data["id"]

    row = (await db_session.execute(select(ServiceRequest))).scalar_one()
    assert str(row.id) == data["id"]
    assert row.status == SubmissionStatus.PENDING
    assert row.reference_number == data["referenceNumber"]
    assert row.account_number is None
    assert row.details == {"kind": "generic", "text": SERVICE_REQUEST["details"]}


@pytest.mark.asyncio
async def test_service_request_unknown_type_is_rejected(client, db_session):
    resp = await client.post("/api/service-request", json={**SERVICE_REQUEST, "type": "solar_panels"})
    assert resp.status_code == 400
    assert any(e["field"] == "type" for e in resp.json()["errors"])
    assert await count(db_session, ServiceRequest) == 0


@pytest.mark.asyncio
async def test_outage_without_hazard_has_no_emergency_note(client, db_session):
    resp = await client.post("/api/outage", json=OUTAGE)
    assert resp.status_code == 200
    data = resp.json()
    assert data["referenceNumber"].startswith("OUT-")
    assert "emergencyNote" not in data
    assert "id" not in data

    row = (await db_session.execute(select(ServiceRequest))).scalar_one()
    assert row.email is None
    assert row.report_kind == "outage"
    assert row.details["hazard_present"] is False


@pytest.mark.asyncio
async def test_outage_with_hazard_has_emergency_note(client):
    resp = await client.post("/api/outage", json={**OUTAGE, "hazardPresent": True})
    assert resp.status_code == 200
    note = resp.json()["emergencyNote"]
    assert note
    assert "0475" in note

    resp = await client.post("/api/outage", json={**OUTAGE, "hazardPresent": False})
    assert "emergencyNote" not in resp.json()


@pytest.mark.asyncio
async def test_outage_validation_failure_mentions_hotline(client):
    resp = await client.post("/api/outage", json={**OUTAGE, "affectedArea": "GT"})
    assert resp.status_code == 400
    assert "0475" in resp.json()["message"]


@pytest.mark.asyncio
async def test_streetlight_report(client, db_session):
    resp = await client.post("/api/streetlight", json=STREETLIGHT)
    assert resp.status_code == 200
    data = resp.json()
    assert data["referenceNumber"].startswith("SL-")
    assert "Guyana" in data["message"]

    row = (await db_session.execute(select(ServiceRequest))).scalar_one()
    assert row.type.value == "streetlight"
    assert row.name == STREETLIGHT["reporterName"]
    assert row.address == STREETLIGHT["location"]
    assert row.parsed_details.issue_type.value == "daylight_burning"


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [0, 6, "4", True, 4.5])
async def test_feedback_rating_must_be_integer_from_1_to_5(client, db_session, rating):
    resp = await client.post(
        "/api/feedback",
        json={"type": "suggestion", "message": "Please add an outage map.", "rating": rating},
    )
    assert resp.status_code == 400
    assert any(e["field"] == "rating" for e in resp.json()["errors"])
    assert await count(db_session, Feedback) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
async def test_feedback_rating_in_range(client, rating):
    resp = await client.post(
        "/api/feedback",
        json={"type": "compliment", "message": "Crew restored power quickly.", "rating": rating, "email": ""},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert "referenceNumber" not in data


@pytest.mark.asyncio
async def test_store_failure_returns_503(client):
    with patch("gpl_site.store.Store.insert", new=AsyncMock(side_effect=PersistenceError("down"))):
        resp = await client.post("/api/outage", json=OUTAGE)
    assert resp.status_code == 503
    data = resp.json()
    assert data["success"] is False
    assert "0475" in data["message"]
    assert "referenceNumber" not in data


@pytest.mark.asyncio
async def test_track_reference(client):
    resp = await client.post("/api/outage", json=OUTAGE)
    reference = resp.json()["referenceNumber"]

    lookup = await client.get(f"/api/service-requests/{reference.lower()}")
    assert lookup.status_code == 200
    data = lookup.json()
    assert data["found"] is True
    assert data["request"]["referenceNumber"] == reference
    assert data["request"]["kind"] == "outage"
    assert data["request"]["status"] == "pending"
    assert "phone" not in data["request"]


@pytest.mark.asyncio
@pytest.mark.parametrize("reference", ["SR-NOPE123", "not-a-reference"])
async def test_track_unknown_reference(client, reference):
    resp = await client.get(f"/api/service-requests/{reference}")
    assert resp.status_code == 200
    assert resp.json() == {"found": False, "request": None}

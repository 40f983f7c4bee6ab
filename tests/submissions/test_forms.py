import pytest

from gpl_site.errors import SubmissionValidationError
from gpl_site.submissions.forms import ContactForm, FeedbackForm, OutageReportForm, StreetlightReportForm
from gpl_site.submissions.pipeline import SubmissionKind, validate_submission


def test_contact_form_accepts_camel_and_blank_phone():
    form = ContactForm.model_validate({
        "name": "Jo",
        "email": "jo@gmail.com",
        "phone": "   ",
        "subject": "Hello",
        "message": "0123456789",
    })
    assert form.phone is None


def test_outage_hazard_defaults_to_false():
    form = OutageReportForm.model_validate({
        "name": "Kevin Adams",
        "phone": "6220001",
        "address": "45 Sheriff Street",
        "affectedArea": "Campbellville",
        "description": "No power since 6 PM.",
    })
    assert form.hazard_present is False
    assert form.account_number is None


def test_streetlight_optional_fields_blank_to_none():
    form = StreetlightReportForm.model_validate({
        "reporterName": "Maria",
        "reporterPhone": "6119876",
        "poleNumber": "",
        "location": "Vlissengen Road and Lamaha",
        "issueType": "flickering",
        "additionalDetails": "",
    })
    assert form.pole_number is None
    assert form.additional_details is None


def test_feedback_blank_email_is_absent():
    form = FeedbackForm.model_validate({"type": "general", "message": "Good website overall.", "email": ""})
    assert form.email is None


def test_validation_error_uses_public_field_names():
    with pytest.raises(SubmissionValidationError) as info:
        validate_submission(SubmissionKind.STREETLIGHT, {
            "reporterName": "M",
            "reporterPhone": "6119876",
            "location": "Vlissengen Road and Lamaha",
            "issueType": "exploded",
        })
    assert info.value.fields == ["issueType", "reporterName"]


def test_validation_error_for_non_object_body():
    with pytest.raises(SubmissionValidationError) as info:
        validate_submission(SubmissionKind.CONTACT, ["not", "an", "object"])
    assert info.value.fields == ["body"]


@pytest.mark.parametrize(
    "field, value",
    [
        ("name", "A"),
        ("name", "A" * 101),
        ("subject", "Hi"),
        ("message", "short"),
        ("message", "m" * 5001),
        ("phone", "1" * 21),
    ],
)
def test_contact_form_length_limits(field, value):
    payload = {
        "name": "Asha Persaud",
        "email": "asha@gmail.com",
        "subject": "Meter reading query",
        "message": "Please check my meter reading.",
        field: value,
    }
    with pytest.raises(SubmissionValidationError) as info:
        validate_submission(SubmissionKind.CONTACT, payload)
    assert info.value.fields == [field]

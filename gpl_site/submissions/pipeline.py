"""Submission pipeline shared by every public form.

validate -> build a PENDING row -> persist -> shape the acknowledgement.

Tracked kinds (service request, outage, streetlight) get a reference number.
It is minted only after the payload validated, stored on the row, and handed
to the caller only when the insert succeeded. Nothing is retried here; a
failed insert is reported at once and the citizen may resubmit.
"""

import enum
import logging
import uuid
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Type

from pydantic import Field, ValidationError

from gpl_site.config import EMERGENCY_HOTLINE
from gpl_site.errors import FieldError, PersistenceError, SubmissionValidationError
from gpl_site.models import (
    Base,
    ContactMethod,
    ContactSubmission,
    Feedback,
    GenericDetails,
    OutageDetails,
    ServiceRequest,
    ServiceRequestType,
    StreetlightDetails,
    SubmissionStatus,
)
from gpl_site.models.details import dump_details
from gpl_site.schemas import CamelModel
from gpl_site.store import Store
from gpl_site.submissions.forms import (
    ContactForm,
    FeedbackForm,
    OutageReportForm,
    ServiceRequestForm,
    StreetlightReportForm,
)
from gpl_site.submissions.reference import ReferencePrefix, generate_reference_number
from gpl_site.utils.logging import error_log

logger = logging.getLogger("GPL.submissions")


class SubmissionKind(str, enum.Enum):
    """Public forms handled by the pipeline."""
    CONTACT = "contact"
    SERVICE_REQUEST = "service_request"
    OUTAGE = "outage"
    STREETLIGHT = "streetlight"
    FEEDBACK = "feedback"


class FailureKind(str, enum.Enum):
    VALIDATION = "validation"
    PERSISTENCE = "persistence"


class SubmissionResult(CamelModel):
    """Acknowledgement returned to the submitter."""
    success: bool
    message: str
    id: Optional[uuid.UUID] = None
    reference_number: Optional[str] = None
    emergency_note: Optional[str] = None
    errors: Optional[List[FieldError]] = None
    failure: Optional[FailureKind] = Field(default=None, exclude=True)
    
    def to_json(self, **kwargs: Any) -> Dict[str, Any]:
        return super().to_json(exclude_none=True, **kwargs)


# --- Row builders ---

def build_contact(form: ContactForm, reference: Optional[str]) -> ContactSubmission:
    return ContactSubmission(
        name=form.name,
        email=str(form.email),
        phone=form.phone,
        subject=form.subject,
        message=form.message,
        status=SubmissionStatus.PENDING,
    )


def build_service_request(form: ServiceRequestForm, reference: Optional[str]) -> ServiceRequest:
    return ServiceRequest(
        type=form.type,
        name=form.name,
        email=str(form.email),
        phone=form.phone,
        address=form.address,
        account_number=form.account_number,
        details=dump_details(GenericDetails(text=form.details)),
        preferred_contact_method=form.preferred_contact_method,
        reference_number=reference,
        status=SubmissionStatus.PENDING,
    )


def build_outage(form: OutageReportForm, reference: Optional[str]) -> ServiceRequest:
    return ServiceRequest(
        type=ServiceRequestType.OTHER,
        name=form.name,
        email=None,
        phone=form.phone,
        address=form.address,
        account_number=form.account_number,
        details=dump_details(OutageDetails(
            affected_area=form.affected_area,
            description=form.description,
            hazard_present=form.hazard_present,
        )),
        preferred_contact_method=ContactMethod.PHONE,
        reference_number=reference,
        status=SubmissionStatus.PENDING,
    )


def build_streetlight(form: StreetlightReportForm, reference: Optional[str]) -> ServiceRequest:
    return ServiceRequest(
        type=ServiceRequestType.STREETLIGHT,
        name=form.reporter_name,
        email=None,
        phone=form.reporter_phone,
        address=form.location,
        details=dump_details(StreetlightDetails(
            pole_number=form.pole_number,
            issue_type=form.issue_type,
            additional_details=form.additional_details,
        )),
        preferred_contact_method=ContactMethod.PHONE,
        reference_number=reference,
        status=SubmissionStatus.PENDING,
    )


def build_feedback(form: FeedbackForm, reference: Optional[str]) -> Feedback:
    return Feedback(
        type=form.type,
        message=form.message,
        name=form.name,
        email=str(form.email) if form.email else None,
        rating=form.rating,
        status=SubmissionStatus.PENDING,
    )


# --- Per-kind configuration ---

class KindConfig(NamedTuple):
    form: Type[CamelModel]
    build: Callable[[Any, Optional[str]], Base]
    prefix: Optional[ReferencePrefix]
    expose_id: bool
    success_message: Callable[[Optional[str]], str]
    failure_message: Callable[[str], str]


SUBMISSION_KINDS: Dict[SubmissionKind, KindConfig] = {
    SubmissionKind.CONTACT: KindConfig(
        form=ContactForm,
        build=build_contact,
        prefix=None,
        expose_id=True,
        success_message=lambda ref: "Thank you for contacting us. We will respond within 2 business days.",
        failure_message=lambda hotline: "An error occurred. Please try again or call our hotline.",
    ),
    SubmissionKind.SERVICE_REQUEST: KindConfig(
        form=ServiceRequestForm,
        build=build_service_request,
        prefix=ReferencePrefix.SERVICE_REQUEST,
        expose_id=True,
        success_message=lambda ref: f"Your service request has been submitted. Reference: {ref}",
        failure_message=lambda hotline: "An error occurred. Please try again or call our hotline.",
    ),
    SubmissionKind.OUTAGE: KindConfig(
        form=OutageReportForm,
        build=build_outage,
        prefix=ReferencePrefix.OUTAGE,
        expose_id=False,
        success_message=lambda ref: f"Outage reported. Reference: {ref}. We will investigate promptly.",
        failure_message=lambda hotline: f"Unable to submit report. Please call {hotline} for immediate assistance.",
    ),
    SubmissionKind.STREETLIGHT: KindConfig(
        form=StreetlightReportForm,
        build=build_streetlight,
        prefix=ReferencePrefix.STREETLIGHT,
        expose_id=False,
        success_message=lambda ref: (
            f"Streetlight issue reported. Reference: {ref}. Thank you for helping keep Guyana safe."
        ),
        failure_message=lambda hotline: "Unable to submit report. Please try again.",
    ),
    SubmissionKind.FEEDBACK: KindConfig(
        form=FeedbackForm,
        build=build_feedback,
        prefix=None,
        expose_id=False,
        success_message=lambda ref: "Thank you for your feedback. We value your input!",
        failure_message=lambda hotline: "Unable to submit feedback. Please try again.",
    ),
}


def hazard_note(hotline: str) -> str:
    return (
        f"HAZARD REPORTED: Please stay away from the area and call {hotline} "
        "immediately if downed lines are present."
    )


def validate_submission(kind: SubmissionKind, raw: Any) -> CamelModel:
    """Check a raw payload against its form. Raises SubmissionValidationError."""
    form = SUBMISSION_KINDS[kind].form
    try:
        return form.model_validate(raw)
    except ValidationError as exc:
        raise SubmissionValidationError.from_pydantic(exc, form) from exc


class SubmissionPipeline:
    """Turns raw form payloads into stored rows and acknowledgements."""
    
    def __init__(self, store: Store, hotline: str = EMERGENCY_HOTLINE) -> None:
        self.store = store
        self.hotline = hotline
    
    async def submit(self, kind: SubmissionKind, raw: Any) -> SubmissionResult:
        config = SUBMISSION_KINDS[kind]
        
        try:
            form = validate_submission(kind, raw)
        except SubmissionValidationError as exc:
            logger.info(f"Rejected {kind.value} submission, invalid fields: {', '.join(exc.fields)}")
            return SubmissionResult(
                success=False,
                message=config.failure_message(self.hotline),
                errors=exc.errors,
                failure=FailureKind.VALIDATION,
            )
        
        reference = generate_reference_number(config.prefix) if config.prefix else None
        record = config.build(form, reference)
        
        try:
            record = await self.store.insert(record)
        except PersistenceError as exc:
            error_log(
                "Failed to store submission",
                exc=exc,
                context={"kind": kind.value, "reference": reference},
                log=logger,
            )
            return SubmissionResult(
                success=False,
                message=config.failure_message(self.hotline),
                failure=FailureKind.PERSISTENCE,
            )
        
        logger.info(f"Accepted {kind.value} submission {record.id}" + (f" ({reference})" if reference else ""))
        
        result = SubmissionResult(
            success=True,
            message=config.success_message(reference),
            id=record.id if config.expose_id else None,
            reference_number=reference,
        )
        if kind is SubmissionKind.OUTAGE and form.hazard_present:
            result.emergency_note = hazard_note(self.hotline)
        return result
    
    async def submit_contact(self, raw: Any) -> SubmissionResult:
        return await self.submit(SubmissionKind.CONTACT, raw)
    
    async def submit_service_request(self, raw: Any) -> SubmissionResult:
        return await self.submit(SubmissionKind.SERVICE_REQUEST, raw)
    
    async def submit_outage(self, raw: Any) -> SubmissionResult:
        return await self.submit(SubmissionKind.OUTAGE, raw)
    
    async def submit_streetlight(self, raw: Any) -> SubmissionResult:
        return await self.submit(SubmissionKind.STREETLIGHT, raw)
    
    async def submit_feedback(self, raw: Any) -> SubmissionResult:
        return await self.submit(SubmissionKind.FEEDBACK, raw)


def provide_pipeline(store: Store) -> SubmissionPipeline:
    """Litestar dependency."""
    return SubmissionPipeline(store)

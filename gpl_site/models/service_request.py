"""Service request model (also holds outage and streetlight reports)."""

import enum
from typing import Any, Dict, Optional, Union

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gpl_site.models.base import Base, value_enum
from gpl_site.models.details import (
    GenericDetails,
    OutageDetails,
    StreetlightDetails,
    parse_details,
)
from gpl_site.models.status import SubmissionStatus


class ServiceRequestType(str, enum.Enum):
    """Kinds of service a customer can request."""
    NEW_CONNECTION = "new_connection"
    DISCONNECTION = "disconnection"
    RECONNECTION = "reconnection"
    METER_ISSUE = "meter_issue"
    BILLING_INQUIRY = "billing_inquiry"
    STREETLIGHT = "streetlight"
    OTHER = "other"          # Also used for outage reports


class ContactMethod(str, enum.Enum):
    """How the customer wants to be contacted about a request."""
    EMAIL = "email"
    PHONE = "phone"


class ServiceRequest(Base):
    """A tracked customer request."""
    
    __tablename__ = "service_requests"
    
    type: Mapped[ServiceRequestType] = mapped_column(
        value_enum(ServiceRequestType, "service_request_type"),
        nullable=False,
        index=True,
    )
    
    # Requester
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(254), nullable=True)  # Not collected by outage/streetlight forms
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    account_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    preferred_contact_method: Mapped[ContactMethod] = mapped_column(
        value_enum(ContactMethod, "contact_method"),
        default=ContactMethod.EMAIL,
        nullable=False,
    )
    
    # Tagged details document, see gpl_site.models.details
    details: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    
    # Code quoted to the citizen (e.g. "OUT-MGX3K2A1B7QZ9P"); the row id stays authoritative
    reference_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, index=True)
    
    status: Mapped[SubmissionStatus] = mapped_column(
        value_enum(SubmissionStatus, "submission_status"),
        default=SubmissionStatus.PENDING,
        nullable=False,
        index=True,
    )
    assigned_to: Mapped[Optional[str]] = mapped_column(String(254), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    @property
    def report_kind(self) -> str:
        """Tag of the details document: generic, outage or streetlight."""
        return (self.details or {}).get("kind", "generic")
    
    @property
    def parsed_details(self) -> Union[GenericDetails, OutageDetails, StreetlightDetails]:
        return parse_details(self.details)
    
    def __repr__(self) -> str:
        return f"<ServiceRequest {self.reference_number} {self.type.value}/{self.report_kind} ({self.status.value})>"

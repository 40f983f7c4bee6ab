"""Validation rules for each public form.

A payload must satisfy every constraint of its form before anything is
written. Optional text fields treat an empty string as "not given".
"""

from typing import Any, Optional

from pydantic import EmailStr, Field, StrictInt, field_validator

from gpl_site.models import ContactMethod, FeedbackType, ServiceRequestType, StreetlightIssue
from gpl_site.schemas import CamelModel


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ContactForm(CamelModel):
    """Public contact form."""
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=20)
    subject: str = Field(..., min_length=5, max_length=200)
    message: str = Field(..., min_length=10, max_length=5000)
    
    @field_validator("phone", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> Any:
        return blank_to_none(value)


class ServiceRequestForm(CamelModel):
    """Generic service request (new connection, meter issue, ...)."""
    type: ServiceRequestType
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=7, max_length=20)
    address: str = Field(..., min_length=10, max_length=500)
    account_number: Optional[str] = Field(default=None, max_length=50)
    details: str = Field(..., min_length=10, max_length=5000)
    preferred_contact_method: ContactMethod = ContactMethod.EMAIL
    
    @field_validator("account_number", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> Any:
        return blank_to_none(value)


class OutageReportForm(CamelModel):
    """Power outage report. No email is collected."""
    name: str = Field(..., min_length=2, max_length=100)
    phone: str = Field(..., min_length=7, max_length=20)
    address: str = Field(..., min_length=10, max_length=500)
    account_number: Optional[str] = Field(default=None, max_length=50)
    affected_area: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=10, max_length=2000)
    hazard_present: bool = False
    
    @field_validator("account_number", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> Any:
        return blank_to_none(value)


class StreetlightReportForm(CamelModel):
    """Faulty streetlight report."""
    reporter_name: str = Field(..., min_length=2, max_length=100)
    reporter_phone: str = Field(..., min_length=7, max_length=20)
    pole_number: Optional[str] = Field(default=None, max_length=50)
    location: str = Field(..., min_length=10, max_length=500)
    issue_type: StreetlightIssue
    additional_details: Optional[str] = Field(default=None, max_length=1000)
    
    @field_validator("pole_number", "additional_details", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> Any:
        return blank_to_none(value)


class FeedbackForm(CamelModel):
    """Complaint, suggestion, compliment or general feedback."""
    type: FeedbackType
    message: str = Field(..., min_length=10, max_length=5000)
    name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[EmailStr] = None
    rating: Optional[StrictInt] = Field(default=None, ge=1, le=5)  # JSON integers only, no "4" or true
    
    @field_validator("name", "email", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> Any:
        return blank_to_none(value)

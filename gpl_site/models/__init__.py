"""GPL website database models."""

from gpl_site.models.base import Base
from gpl_site.models.status import SubmissionStatus, ContentStatus
from gpl_site.models.contact import ContactSubmission
from gpl_site.models.service_request import ServiceRequest, ServiceRequestType, ContactMethod
from gpl_site.models.details import (
    GenericDetails,
    OutageDetails,
    StreetlightDetails,
    StreetlightIssue,
)
from gpl_site.models.feedback import Feedback, FeedbackType
from gpl_site.models.faq import Faq, FaqCategory
from gpl_site.models.news import NewsArticle
from gpl_site.models.emergency_contact import EmergencyContact

__all__ = [
    "Base",
    "SubmissionStatus",
    "ContentStatus",
    "ContactSubmission",
    "ServiceRequest",
    "ServiceRequestType",
    "ContactMethod",
    "GenericDetails",
    "OutageDetails",
    "StreetlightDetails",
    "StreetlightIssue",
    "Feedback",
    "FeedbackType",
    "Faq",
    "FaqCategory",
    "NewsArticle",
    "EmergencyContact",
]

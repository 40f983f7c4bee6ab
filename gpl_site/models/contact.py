"""Contact form submission model."""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gpl_site.models.base import Base, value_enum
from gpl_site.models.status import SubmissionStatus


class ContactSubmission(Base):
    """Message sent through the public contact form."""
    
    __tablename__ = "contact_submissions"
    
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[SubmissionStatus] = mapped_column(
        value_enum(SubmissionStatus, "submission_status"),
        default=SubmissionStatus.PENDING,
        nullable=False,
        index=True,
    )
    
    # Staff handling (admin only)
    assigned_to: Mapped[Optional[str]] = mapped_column(String(254), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    def __repr__(self) -> str:
        return f"<ContactSubmission {self.email}: {self.subject[:40]} ({self.status.value})>"

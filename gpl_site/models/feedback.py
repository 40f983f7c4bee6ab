"""Feedback model for user feedback submissions."""

import enum
from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gpl_site.models.base import Base, value_enum
from gpl_site.models.status import SubmissionStatus


class FeedbackType(str, enum.Enum):
    """Nature of a feedback entry."""
    COMPLAINT = "complaint"
    SUGGESTION = "suggestion"
    COMPLIMENT = "compliment"
    GENERAL = "general"


class Feedback(Base):
    """User feedback submission. Name and email are optional (anonymous feedback)."""
    
    __tablename__ = "feedback"
    
    type: Mapped[FeedbackType] = mapped_column(
        value_enum(FeedbackType, "feedback_type"),
        nullable=False,
        index=True,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(254), nullable=True)
    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # 1-5 when given
    status: Mapped[SubmissionStatus] = mapped_column(
        value_enum(SubmissionStatus, "submission_status"),
        default=SubmissionStatus.PENDING,
        nullable=False,
        index=True,
    )
    
    def __repr__(self) -> str:
        return f"<Feedback {self.type.value} ({self.created_at})>"

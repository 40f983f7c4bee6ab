"""Frequently asked question model."""

import enum

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gpl_site.models.base import Base, value_enum


class FaqCategory(str, enum.Enum):
    """Sections of the FAQ page."""
    BILLING = "billing"
    CONNECTIONS = "connections"
    OUTAGES = "outages"
    STREETLIGHTS = "streetlights"
    SAFETY = "safety"
    CUSTOMER_SERVICE = "customer_service"
    TECHNICAL = "technical"
    ACCOUNT = "account"
    EMERGENCY = "emergency"


class Faq(Base):
    """A question and answer shown on the FAQ page when published."""
    
    __tablename__ = "faqs"
    
    question: Mapped[str] = mapped_column(String(500), nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[FaqCategory] = mapped_column(
        value_enum(FaqCategory, "faq_category"),
        nullable=False,
        index=True,
    )
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    
    def __repr__(self) -> str:
        return f"<Faq {self.category.value}#{self.display_order}: {self.question[:40]}>"

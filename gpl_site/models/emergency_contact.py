"""Regional emergency contact model."""

from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gpl_site.models.base import Base


class EmergencyContact(Base):
    """Emergency hotline for a region, shown on every page when active."""
    
    __tablename__ = "emergency_contacts"
    
    region: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    primary_number: Mapped[str] = mapped_column(String(20), nullable=False)
    secondary_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    available: Mapped[str] = mapped_column(String(100), default="24/7", nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    
    def __repr__(self) -> str:
        return f"<EmergencyContact {self.region}: {self.primary_number}>"

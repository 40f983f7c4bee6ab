"""News article model."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gpl_site.models.base import Base, value_enum
from gpl_site.models.status import ContentStatus


class NewsArticle(Base):
    """News article or announcement. Only PUBLISHED articles are public."""
    
    __tablename__ = "news"
    
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), unique=True, index=True, nullable=False)
    excerpt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    featured_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    status: Mapped[ContentStatus] = mapped_column(
        value_enum(ContentStatus, "content_status"),
        default=ContentStatus.DRAFT,
        nullable=False,
        index=True,
    )
    author_email: Mapped[Optional[str]] = mapped_column(String(254), nullable=True)
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )
    
    def __repr__(self) -> str:
        return f"<NewsArticle {self.slug} ({self.status.value})>"

"""Read paths for public content: FAQs, news and emergency contacts.

Every query here enforces its own visibility rule (published FAQs, published
articles, active contacts) whatever filters the caller adds.

Emergency contacts are the one read that never fails: when the table cannot
be read the built-in hotlines from ``gpl_site.emergency`` are served instead.
"""

import logging
import uuid
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Tuple, TypeVar

from sqlalchemy import or_, select

from gpl_site.emergency import EMERGENCY_HOTLINES
from gpl_site.models import ContentStatus, EmergencyContact, Faq, FaqCategory, NewsArticle
from gpl_site.schemas import CamelModel
from gpl_site.store import Store
from gpl_site.utils.logging import debug_log

logger = logging.getLogger("GPL.content")

T = TypeVar("T")

FAQ_PAGE_SIZE = 100
NEWS_DEFAULT_LIMIT = 10
NEWS_MAX_LIMIT = 50


# --- Response Schemas ---

class FaqItem(CamelModel):
    id: uuid.UUID
    question: str
    answer: str
    category: FaqCategory
    order: int


class NewsSummary(CamelModel):
    id: uuid.UUID
    title: str
    slug: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None


class NewsArticleDetail(NewsSummary):
    content: str


class EmergencyContactItem(CamelModel):
    id: str
    region: str
    name: str
    primary_number: str
    secondary_number: Optional[str] = None
    description: Optional[str] = None
    available: str


# --- Fallback ---

def fallback_emergency_contacts() -> List[EmergencyContactItem]:
    """Built-in regional hotlines, one per known region."""
    return [
        EmergencyContactItem(
            id=f"fallback-{index}",
            region=hotline.region,
            name=hotline.name,
            primary_number=hotline.primary_number,
            secondary_number=hotline.secondary_number,
            description=hotline.description,
            available=hotline.available,
        )
        for index, hotline in enumerate(EMERGENCY_HOTLINES, start=1)
    ]


async def with_fallback(
    fetch: Callable[[], Awaitable[T]],
    fallback: Callable[[], T],
    label: str,
    use_fallback_when: Optional[Callable[[T], bool]] = None,
) -> T:
    """Run ``fetch``; on any error (or when ``use_fallback_when`` says so) return ``fallback()``."""
    try:
        result = await fetch()
    except Exception as exc:
        logger.warning(f"Serving fallback {label}: {type(exc).__name__}: {exc}")
        return fallback()
    if use_fallback_when is not None and use_fallback_when(result):
        logger.warning(f"Serving fallback {label}: no rows available")
        return fallback()
    return result


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ContentReader:
    """Queries behind the public FAQ, news and emergency contact endpoints."""
    
    def __init__(self, store: Store) -> None:
        self.store = store
    
    async def list_faqs(
        self,
        category: Optional[FaqCategory] = None,
        search: Optional[str] = None,
    ) -> List[FaqItem]:
        """Published FAQs ordered by display order, then category."""
        stmt = select(Faq).where(Faq.is_published.is_(True))
        if category is not None:
            stmt = stmt.where(Faq.category == category)
        if search and search.strip():
            pattern = f"%{escape_like(search.strip())}%"
            stmt = stmt.where(or_(
                Faq.question.ilike(pattern, escape="\\"),
                Faq.answer.ilike(pattern, escape="\\"),
            ))
        stmt = stmt.order_by(Faq.display_order, Faq.category).limit(FAQ_PAGE_SIZE)
        
        rows = await self.store.fetch_all(stmt)
        debug_log("FAQ query category=%s search=%r returned %d rows", category, search, len(rows))
        return [
            FaqItem(
                id=row.id,
                question=row.question,
                answer=row.answer,
                category=row.category,
                order=row.display_order,
            )
            for row in rows
        ]
    
    async def list_news(
        self,
        limit: int = NEWS_DEFAULT_LIMIT,
        offset: int = 0,
    ) -> Tuple[List[NewsSummary], int]:
        """A page of published articles, newest first, and the total published count."""
        limit = max(1, min(limit, NEWS_MAX_LIMIT))
        offset = max(0, offset)
        published = select(NewsArticle).where(NewsArticle.status == ContentStatus.PUBLISHED)
        
        rows = await self.store.fetch_all(
            published
            .order_by(NewsArticle.published_at.desc())
            .limit(limit)
            .offset(offset)
        )
        total = await self.store.count(published)
        return [NewsSummary.model_validate(row) for row in rows], total
    
    async def get_news_article(self, slug: str) -> Optional[NewsArticleDetail]:
        """Full article by slug, or None unless it exists AND is published."""
        row = await self.store.fetch_one(
            select(NewsArticle)
            .where(
                NewsArticle.slug == slug,
                NewsArticle.status == ContentStatus.PUBLISHED,
            )
            .limit(1)
        )
        if row is None:
            return None
        return NewsArticleDetail.model_validate(row)
    
    async def _fetch_active_contacts(self) -> List[EmergencyContactItem]:
        rows = await self.store.fetch_all(
            select(EmergencyContact)
            .where(EmergencyContact.is_active.is_(True))
            .order_by(EmergencyContact.display_order)
        )
        return [
            EmergencyContactItem(
                id=str(row.id),
                region=row.region,
                name=row.name,
                primary_number=row.primary_number,
                secondary_number=row.secondary_number,
                description=row.description,
                available=row.available,
            )
            for row in rows
        ]
    
    async def list_emergency_contacts(self) -> List[EmergencyContactItem]:
        """Active contacts in display order; never raises."""
        return await with_fallback(
            self._fetch_active_contacts,
            fallback_emergency_contacts,
            label="emergency contacts",
            # Every contact deactivated also serves the built-in hotlines: the site never shows no number
            use_fallback_when=lambda contacts: not contacts,
        )


def provide_content(store: Store) -> ContentReader:
    """Litestar dependency."""
    return ContentReader(store)

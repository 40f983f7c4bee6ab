"""Public content endpoints: FAQs, news and emergency contacts."""

import logging
from typing import Any, Dict, Optional

from litestar import Controller, get
from litestar.params import Parameter

from gpl_site.content import NEWS_DEFAULT_LIMIT, NEWS_MAX_LIMIT, ContentReader
from gpl_site.models import FaqCategory

logger = logging.getLogger("GPL.content")


class ContentController(Controller):
    """Read-only endpoints for anonymous visitors."""
    
    path = "/api"
    tags = ["content"]
    
    @get("/faqs")
    async def list_faqs(
        self,
        content: ContentReader,
        category: Optional[FaqCategory] = None,
        search: Optional[str] = Parameter(default=None, max_length=200),
    ) -> Dict[str, Any]:
        """Published FAQs, optionally filtered by category and search text."""
        faqs = await content.list_faqs(category=category, search=search)
        return {"faqs": [f.to_json() for f in faqs], "total": len(faqs)}
    
    @get("/news")
    async def list_news(
        self,
        content: ContentReader,
        limit: int = Parameter(default=NEWS_DEFAULT_LIMIT, ge=1, le=NEWS_MAX_LIMIT),
        offset: int = Parameter(default=0, ge=0),
    ) -> Dict[str, Any]:
        """Published news, newest first."""
        articles, total = await content.list_news(limit=limit, offset=offset)
        return {"news": [a.to_json() for a in articles], "total": total}
    
    @get("/news/{slug:str}")
    async def get_news_article(self, slug: str, content: ContentReader) -> Dict[str, Any]:
        """Single published article. Drafts and archived articles read as not found."""
        article = await content.get_news_article(slug)
        if article is None:
            return {"found": False, "article": None}
        return {"found": True, "article": article.to_json()}
    
    @get("/emergency-contacts")
    async def list_emergency_contacts(self, content: ContentReader) -> Dict[str, Any]:
        """Regional emergency numbers. Always 200, built-in list if the store fails."""
        contacts = await content.list_emergency_contacts()
        return {"contacts": [c.to_json() for c in contacts]}

"""Public page routes."""

import logging
from typing import Awaitable, Tuple, TypeVar

from litestar import Request, get
from litestar.exceptions import NotFoundException
from litestar.response import Template

from gpl_site.content import ContentReader
from gpl_site.emergency import ADDITIONAL_CONTACTS, SAFETY_MESSAGES, phone_href
from gpl_site.errors import PersistenceError
from gpl_site.models import ServiceRequestType, StreetlightIssue
from gpl_site.utils import get_base_path

logger = logging.getLogger("GPL.pages")

T = TypeVar("T")


async def or_unavailable(fetch: Awaitable[T], default: T) -> Tuple[T, bool]:
    """Await a content read; on store failure return ``default`` and flag the page section unavailable."""
    try:
        return await fetch, False
    except PersistenceError as exc:
        logger.warning(f"Rendering page without content: {exc}")
        return default, True


async def page(
    request: Request,
    content: ContentReader,
    template_name: str,
    status_code: int = 200,
    **context,
) -> Template:
    """Render a page with the emergency banner every page carries."""
    return Template(
        template_name=template_name,
        status_code=status_code,
        context={
            "base_path": get_base_path(request),
            "emergency_contacts": await content.list_emergency_contacts(),
            "phone_href": phone_href,
            **context,
        },
    )


@get("/")
async def home(request: Request, content: ContentReader) -> Template:
    """Home page: emergency numbers and latest news."""
    (articles, _), unavailable = await or_unavailable(content.list_news(limit=3), ([], 0))
    return await page(request, content, "home.html", articles=articles, unavailable=unavailable)


@get("/services")
async def services(request: Request, content: ContentReader) -> Template:
    return await page(
        request,
        content,
        "services.html",
        request_types=list(ServiceRequestType),
        streetlight_issues=list(StreetlightIssue),
    )


@get("/safety")
async def safety(request: Request, content: ContentReader) -> Template:
    return await page(
        request,
        content,
        "safety.html",
        safety_messages=SAFETY_MESSAGES,
        additional_contacts=ADDITIONAL_CONTACTS,
    )


@get("/faq")
async def faq(request: Request, content: ContentReader) -> Template:
    faqs, unavailable = await or_unavailable(content.list_faqs(), [])
    return await page(request, content, "faq.html", faqs=faqs, unavailable=unavailable)


@get("/news")
async def news_index(request: Request, content: ContentReader) -> Template:
    (articles, total), unavailable = await or_unavailable(content.list_news(limit=20), ([], 0))
    return await page(request, content, "news.html", articles=articles, total=total, unavailable=unavailable)


@get("/news/{slug:str}")
async def news_article(slug: str, request: Request, content: ContentReader) -> Template:
    article, unavailable = await or_unavailable(content.get_news_article(slug), None)
    if unavailable:
        return await page(request, content, "article.html", status_code=503, article=None, unavailable=True)
    if article is None:
        raise NotFoundException("Article not found")
    return await page(request, content, "article.html", article=article, unavailable=False)


@get("/status")
async def status(request: Request, content: ContentReader) -> Template:
    return await page(request, content, "status.html")


@get("/contact")
async def contact(request: Request, content: ContentReader) -> Template:
    """Contact, outage, streetlight and feedback forms."""
    return await page(
        request,
        content,
        "contact.html",
        request_types=list(ServiceRequestType),
        streetlight_issues=list(StreetlightIssue),
    )


routes = [home, services, safety, faq, news_index, news_article, status, contact]

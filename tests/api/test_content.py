from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest

from gpl_site.errors import PersistenceError
from gpl_site.models import ContentStatus, EmergencyContact, Faq, FaqCategory, NewsArticle


def make_faq(question, category=FaqCategory.BILLING, published=True, order=0):
    return Faq(
        question=question,
        answer=f"Answer to: {question}",
        category=category,
        display_order=order,
        is_published=published,
    )


def make_article(slug, status=ContentStatus.PUBLISHED, days_ago=0):
    return NewsArticle(
        title=slug.replace("-", " ").title(),
        slug=slug,
        excerpt="Short summary",
        content="Full article text.",
        status=status,
        published_at=datetime.now(timezone.utc) - timedelta(days=days_ago),
    )


@pytest.fixture
def faqs():
    return [
        make_faq("How do I pay my bill?", order=2),
        make_faq("Why is my bill high?", order=1),
        make_faq("How do I report an outage?", category=FaqCategory.OUTAGES, order=1),
        make_faq("Draft: how do I read my meter?", published=False),
        make_faq("Draft outage question", category=FaqCategory.OUTAGES, published=False),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {},
        {"category": "billing"},
        {"category": "outages"},
        {"search": "bill"},
        {"search": "draft"},
        {"category": "outages", "search": "outage"},
    ],
)
async def test_faqs_only_published(client, db_session, faqs, params):
    db_session.add_all(faqs)
    await db_session.commit()
    unpublished = {f.question for f in faqs if not f.is_published}

    resp = await client.get("/api/faqs", params=params)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == len(data["faqs"])
    assert not unpublished & {f["question"] for f in data["faqs"]}
    if "category" in params:
        assert all(f["category"] == params["category"] for f in data["faqs"])


@pytest.mark.asyncio
async def test_faqs_ordered_by_display_order(client, db_session, faqs):
    db_session.add_all(faqs)
    await db_session.commit()

    resp = await client.get("/api/faqs", params={"category": "billing"})
    questions = [f["question"] for f in resp.json()["faqs"]]
    assert questions == ["Why is my bill high?", "How do I pay my bill?"]
    assert resp.json()["faqs"][0]["order"] == 1


@pytest.mark.asyncio
async def test_faqs_unknown_category_is_rejected(client):
    resp = await client.get("/api/faqs", params={"category": "weather"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_news_lists_published_newest_first(client, db_session):
    db_session.add_all([
        make_article("old-news", days_ago=10),
        make_article("new-tariffs", days_ago=1),
        make_article("unfinished-draft", status=ContentStatus.DRAFT),
        make_article("retired-notice", status=ContentStatus.ARCHIVED, days_ago=30),
    ])
    await db_session.commit()

    resp = await client.get("/api/news")
    assert resp.status_code == 200
    data = resp.json()
    assert [a["slug"] for a in data["news"]] == ["new-tariffs", "old-news"]
    assert data["total"] == 2
    assert "content" not in data["news"][0]

    page = (await client.get("/api/news", params={"limit": 1, "offset": 1})).json()
    assert [a["slug"] for a in page["news"]] == ["old-news"]
    assert page["total"] == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 51}, {"offset": -1}])
async def test_news_paging_bounds(client, params):
    resp = await client.get("/api/news", params=params)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_news_article_by_slug(client, db_session):
    db_session.add(make_article("new-tariffs"))
    await db_session.commit()

    resp = await client.get("/api/news/new-tariffs")
    assert resp.status_code == 200
    data = resp.json()
    assert data["found"] is True
    assert data["article"]["content"] == "Full article text."
    assert data["article"]["publishedAt"]


@pytest.mark.asyncio
async def test_draft_article_reads_as_missing(client, db_session):
    db_session.add(make_article("unfinished-draft", status=ContentStatus.DRAFT))
    await db_session.commit()

    draft = await client.get("/api/news/unfinished-draft")
    missing = await client.get("/api/news/no-such-article")
    assert draft.status_code == missing.status_code == 200
    assert draft.json() == missing.json() == {"found": False, "article": None}


@pytest.mark.asyncio
async def test_emergency_contacts_from_store(client, db_session):
    db_session.add_all([
        EmergencyContact(region="Berbice", name="Berbice Emergency Hotline", primary_number="333-2186", display_order=2),
        EmergencyContact(region="Demerara", name="Demerara Emergency Hotline", primary_number="0475", display_order=1),
        EmergencyContact(region="Linden", name="Linden Emergency Hotline", primary_number="444-6231", is_active=False),
    ])
    await db_session.commit()

    resp = await client.get("/api/emergency-contacts")
    assert resp.status_code == 200
    contacts = resp.json()["contacts"]
    assert [c["region"] for c in contacts] == ["Demerara", "Berbice"]
    assert contacts[0]["primaryNumber"] == "0475"
    assert contacts[0]["available"] == "24/7"


@pytest.mark.asyncio
async def test_emergency_contacts_fall_back_when_store_fails(client):
    with patch("gpl_site.store.Store.fetch_all", new=AsyncMock(side_effect=PersistenceError("down"))):
        resp = await client.get("/api/emergency-contacts")
    assert resp.status_code == 200
    contacts = resp.json()["contacts"]
    assert {"Demerara", "Berbice", "Essequibo"} <= {c["region"] for c in contacts}
    assert all(c["id"].startswith("fallback-") for c in contacts)


@pytest.mark.asyncio
async def test_emergency_contacts_fall_back_when_table_empty(client):
    resp = await client.get("/api/emergency-contacts")
    assert resp.status_code == 200
    regions = [c["region"] for c in resp.json()["contacts"]]
    assert regions == ["Demerara", "Berbice", "Essequibo"]


@pytest.mark.asyncio
async def test_faq_store_failure_is_503(client):
    with patch("gpl_site.store.Store.fetch_all", new=AsyncMock(side_effect=PersistenceError("down"))):
        resp = await client.get("/api/faqs")
    assert resp.status_code == 503

"""Admin API endpoints (back-office over submissions and content)."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, List, Optional, Type, TypeVar

from litestar import Controller, Request, delete, get, patch, post
from litestar.exceptions import NotFoundException, ValidationException
from litestar.params import Parameter
from pydantic import Field
from sqlalchemy import select

from gpl_site.auth.oauth import require_admin_guard, require_super_admin_guard
from gpl_site.models import (
    Base,
    ContactMethod,
    ContactSubmission,
    ContentStatus,
    EmergencyContact,
    Faq,
    FaqCategory,
    Feedback,
    FeedbackType,
    NewsArticle,
    ServiceRequest,
    ServiceRequestType,
    SubmissionStatus,
)
from gpl_site.schemas import CamelModel
from gpl_site.store import Store

logger = logging.getLogger("GPL.admin")

ModelT = TypeVar("ModelT", bound=Base)

SLUG_PATTERN = r"^[a-z0-9-]+$"
LIST_LIMIT = 100


# --- Request Schemas ---

class SubmissionUpdateRequest(CamelModel):
    """Staff workflow update on a contact submission or service request."""
    status: Optional[SubmissionStatus] = None
    notes: Optional[str] = Field(default=None, max_length=5000)
    assigned_to: Optional[str] = Field(default=None, max_length=254)


class FeedbackUpdateRequest(CamelModel):
    status: SubmissionStatus


class FaqCreateRequest(CamelModel):
    question: str = Field(..., min_length=5, max_length=500)
    answer: str = Field(..., min_length=10)
    category: FaqCategory
    order: int = Field(default=0, ge=0)
    is_published: bool = True


class FaqUpdateRequest(CamelModel):
    question: Optional[str] = Field(default=None, min_length=5, max_length=500)
    answer: Optional[str] = Field(default=None, min_length=10)
    category: Optional[FaqCategory] = None
    order: Optional[int] = Field(default=None, ge=0)
    is_published: Optional[bool] = None


class NewsCreateRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200, pattern=SLUG_PATTERN)
    excerpt: Optional[str] = None
    content: str = Field(..., min_length=1)
    featured_image: Optional[str] = Field(default=None, max_length=500)
    status: ContentStatus = ContentStatus.DRAFT
    published_at: Optional[datetime] = None


class NewsUpdateRequest(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=200, pattern=SLUG_PATTERN)
    excerpt: Optional[str] = None
    content: Optional[str] = Field(default=None, min_length=1)
    featured_image: Optional[str] = Field(default=None, max_length=500)
    status: Optional[ContentStatus] = None
    published_at: Optional[datetime] = None


class EmergencyContactCreateRequest(CamelModel):
    region: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=200)
    primary_number: str = Field(..., min_length=3, max_length=20)
    secondary_number: Optional[str] = Field(default=None, max_length=20)
    description: Optional[str] = None
    available: str = Field(default="24/7", min_length=1, max_length=100)
    order: int = Field(default=0, ge=0)
    is_active: bool = True


class EmergencyContactUpdateRequest(CamelModel):
    region: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    primary_number: Optional[str] = Field(default=None, min_length=3, max_length=20)
    secondary_number: Optional[str] = Field(default=None, max_length=20)
    description: Optional[str] = None
    available: Optional[str] = Field(default=None, min_length=1, max_length=100)
    order: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


# --- Response Schemas ---

class ContactSubmissionItem(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    phone: Optional[str]
    subject: str
    message: str
    status: SubmissionStatus
    assigned_to: Optional[str]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime


class ServiceRequestItem(CamelModel):
    id: uuid.UUID
    type: ServiceRequestType
    kind: str = Field(validation_alias="report_kind")
    name: str
    email: Optional[str]
    phone: str
    address: str
    account_number: Optional[str]
    details: Dict[str, Any]
    preferred_contact_method: ContactMethod
    reference_number: Optional[str]
    status: SubmissionStatus
    assigned_to: Optional[str]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime


class FeedbackItem(CamelModel):
    id: uuid.UUID
    type: FeedbackType
    message: str
    name: Optional[str]
    email: Optional[str]
    rating: Optional[int]
    status: SubmissionStatus
    created_at: datetime


class AdminFaqItem(CamelModel):
    id: uuid.UUID
    question: str
    answer: str
    category: FaqCategory
    order: int = Field(validation_alias="display_order")
    is_published: bool
    updated_at: datetime


class AdminNewsItem(CamelModel):
    id: uuid.UUID
    title: str
    slug: str
    excerpt: Optional[str]
    content: str
    featured_image: Optional[str]
    status: ContentStatus
    author_email: Optional[str]
    published_at: Optional[datetime]
    updated_at: datetime


class AdminEmergencyContactItem(CamelModel):
    id: uuid.UUID
    region: str
    name: str
    primary_number: str
    secondary_number: Optional[str]
    description: Optional[str]
    available: str
    order: int = Field(validation_alias="display_order")
    is_active: bool
    updated_at: datetime


class StatsResponse(CamelModel):
    pending_contacts: int
    pending_service_requests: int
    pending_outages: int
    pending_feedback: int
    published_faqs: int
    published_news: int
    draft_news: int
    active_emergency_contacts: int


# --- Helper Functions ---

# Request field -> column attribute, where they differ
RENAMES = {"order": "display_order"}


def apply_changes(row: Base, changes: Dict[str, Any], nullable: FrozenSet[str] = frozenset()) -> None:
    """Copy explicitly sent fields onto a row. Null is only accepted for nullable columns."""
    for field, value in changes.items():
        if value is None and field not in nullable:
            raise ValidationException(f"{field} cannot be null")
        setattr(row, RENAMES.get(field, field), value)


async def get_or_404(store: Store, model: Type[ModelT], record_id: uuid.UUID) -> ModelT:
    row = await store.get(model, record_id)
    if row is None:
        raise NotFoundException(f"{model.__name__} {record_id} not found")
    return row


def stamp_publication(article: NewsArticle) -> None:
    """Publishing an article for the first time records when."""
    if article.status == ContentStatus.PUBLISHED and article.published_at is None:
        article.published_at = datetime.now(timezone.utc)


def dump(items: List[CamelModel]) -> List[Dict[str, Any]]:
    return [item.to_json() for item in items]


# --- Controller ---

class AdminController(Controller):
    """API endpoints for the admin dashboard."""
    
    path = "/api/admin"
    tags = ["admin"]
    guards = [require_admin_guard]
    
    @get("/stats")
    async def get_stats(self, store: Store) -> Dict[str, Any]:
        """Counts shown on the dashboard."""
        pending = SubmissionStatus.PENDING
        stats = StatsResponse(
            pending_contacts=await store.count(
                select(ContactSubmission).where(ContactSubmission.status == pending)
            ),
            pending_service_requests=await store.count(
                select(ServiceRequest).where(ServiceRequest.status == pending)
            ),
            pending_outages=await store.count(
                select(ServiceRequest).where(
                    ServiceRequest.status == pending,
                    ServiceRequest.details["kind"].as_string() == "outage",
                )
            ),
            pending_feedback=await store.count(
                select(Feedback).where(Feedback.status == pending)
            ),
            published_faqs=await store.count(select(Faq).where(Faq.is_published.is_(True))),
            published_news=await store.count(
                select(NewsArticle).where(NewsArticle.status == ContentStatus.PUBLISHED)
            ),
            draft_news=await store.count(
                select(NewsArticle).where(NewsArticle.status == ContentStatus.DRAFT)
            ),
            active_emergency_contacts=await store.count(
                select(EmergencyContact).where(EmergencyContact.is_active.is_(True))
            ),
        )
        return stats.to_json()
    
    # --- Contact submissions ---
    
    @get("/contacts")
    async def list_contacts(
        self,
        store: Store,
        status: Optional[SubmissionStatus] = None,
        limit: int = Parameter(default=LIST_LIMIT, ge=1, le=500),
        offset: int = Parameter(default=0, ge=0),
    ) -> List[Dict[str, Any]]:
        """Contact submissions, newest first."""
        stmt = select(ContactSubmission).order_by(ContactSubmission.created_at.desc())
        if status is not None:
            stmt = stmt.where(ContactSubmission.status == status)
        rows = await store.fetch_all(stmt.limit(limit).offset(offset))
        return dump([ContactSubmissionItem.model_validate(r) for r in rows])
    
    @patch("/contacts/{contact_id:uuid}")
    async def update_contact(
        self,
        contact_id: uuid.UUID,
        data: SubmissionUpdateRequest,
        store: Store,
    ) -> Dict[str, Any]:
        """Change status, notes or assignee."""
        row = await get_or_404(store, ContactSubmission, contact_id)
        apply_changes(row, data.model_dump(exclude_unset=True), nullable=frozenset({"notes", "assigned_to"}))
        row = await store.save(row)
        logger.info(f"Contact submission {contact_id} updated: status={row.status.value}")
        return ContactSubmissionItem.model_validate(row).to_json()
    
    # --- Service requests (incl. outage and streetlight reports) ---
    
    @get("/service-requests")
    async def list_service_requests(
        self,
        store: Store,
        status: Optional[SubmissionStatus] = None,
        type: Optional[ServiceRequestType] = None,
        kind: Optional[str] = Parameter(default=None, pattern="^(generic|outage|streetlight)$"),
        limit: int = Parameter(default=LIST_LIMIT, ge=1, le=500),
        offset: int = Parameter(default=0, ge=0),
    ) -> List[Dict[str, Any]]:
        """Service requests, newest first."""
        stmt = select(ServiceRequest).order_by(ServiceRequest.created_at.desc())
        if status is not None:
            stmt = stmt.where(ServiceRequest.status == status)
        if type is not None:
            stmt = stmt.where(ServiceRequest.type == type)
        if kind is not None:
            stmt = stmt.where(ServiceRequest.details["kind"].as_string() == kind)
        rows = await store.fetch_all(stmt.limit(limit).offset(offset))
        return dump([ServiceRequestItem.model_validate(r) for r in rows])
    
    @patch("/service-requests/{request_id:uuid}")
    async def update_service_request(
        self,
        request_id: uuid.UUID,
        data: SubmissionUpdateRequest,
        store: Store,
    ) -> Dict[str, Any]:
        """Change status, notes or assignee."""
        row = await get_or_404(store, ServiceRequest, request_id)
        apply_changes(row, data.model_dump(exclude_unset=True), nullable=frozenset({"notes", "assigned_to"}))
        row = await store.save(row)
        logger.info(f"Service request {row.reference_number or request_id} updated: status={row.status.value}")
        return ServiceRequestItem.model_validate(row).to_json()
    
    # --- Feedback ---
    
    @get("/feedback")
    async def list_feedback(
        self,
        store: Store,
        status: Optional[SubmissionStatus] = None,
        type: Optional[FeedbackType] = None,
        limit: int = Parameter(default=LIST_LIMIT, ge=1, le=500),
        offset: int = Parameter(default=0, ge=0),
    ) -> List[Dict[str, Any]]:
        """Feedback entries, newest first."""
        stmt = select(Feedback).order_by(Feedback.created_at.desc())
        if status is not None:
            stmt = stmt.where(Feedback.status == status)
        if type is not None:
            stmt = stmt.where(Feedback.type == type)
        rows = await store.fetch_all(stmt.limit(limit).offset(offset))
        return dump([FeedbackItem.model_validate(r) for r in rows])
    
    @patch("/feedback/{feedback_id:uuid}")
    async def update_feedback(
        self,
        feedback_id: uuid.UUID,
        data: FeedbackUpdateRequest,
        store: Store,
    ) -> Dict[str, Any]:
        row = await get_or_404(store, Feedback, feedback_id)
        row.status = data.status
        row = await store.save(row)
        return FeedbackItem.model_validate(row).to_json()
    
    # --- FAQs ---
    
    @get("/faqs")
    async def list_faqs(self, store: Store, category: Optional[FaqCategory] = None) -> List[Dict[str, Any]]:
        """All FAQs, published or not."""
        stmt = select(Faq).order_by(Faq.display_order, Faq.category)
        if category is not None:
            stmt = stmt.where(Faq.category == category)
        rows = await store.fetch_all(stmt)
        return dump([AdminFaqItem.model_validate(r) for r in rows])
    
    @post("/faqs")
    async def create_faq(self, data: FaqCreateRequest, store: Store) -> Dict[str, Any]:
        faq = await store.insert(Faq(
            question=data.question,
            answer=data.answer,
            category=data.category,
            display_order=data.order,
            is_published=data.is_published,
        ))
        logger.info(f"FAQ created: {faq.id}")
        return AdminFaqItem.model_validate(faq).to_json()
    
    @patch("/faqs/{faq_id:uuid}")
    async def update_faq(self, faq_id: uuid.UUID, data: FaqUpdateRequest, store: Store) -> Dict[str, Any]:
        faq = await get_or_404(store, Faq, faq_id)
        apply_changes(faq, data.model_dump(exclude_unset=True))
        faq = await store.save(faq)
        return AdminFaqItem.model_validate(faq).to_json()
    
    @delete("/faqs/{faq_id:uuid}")
    async def delete_faq(self, faq_id: uuid.UUID, store: Store) -> None:
        faq = await get_or_404(store, Faq, faq_id)
        await store.delete(faq)
        logger.info(f"FAQ deleted: {faq_id}")
    
    # --- News ---
    
    @get("/news")
    async def list_news(self, store: Store, status: Optional[ContentStatus] = None) -> List[Dict[str, Any]]:
        """All articles, any status, most recently edited first."""
        stmt = select(NewsArticle).order_by(NewsArticle.updated_at.desc())
        if status is not None:
            stmt = stmt.where(NewsArticle.status == status)
        rows = await store.fetch_all(stmt)
        return dump([AdminNewsItem.model_validate(r) for r in rows])
    
    @post("/news")
    async def create_news(self, request: Request, data: NewsCreateRequest, store: Store) -> Dict[str, Any]:
        """Create an article. Duplicate slugs are rejected with 409."""
        article = NewsArticle(
            title=data.title,
            slug=data.slug,
            excerpt=data.excerpt,
            content=data.content,
            featured_image=data.featured_image,
            status=data.status,
            published_at=data.published_at,
            author_email=request.state.admin.email,
        )
        stamp_publication(article)
        article = await store.insert(article)
        logger.info(f"News article created: {article.slug} ({article.status.value})")
        return AdminNewsItem.model_validate(article).to_json()
    
    @patch("/news/{article_id:uuid}")
    async def update_news(self, article_id: uuid.UUID, data: NewsUpdateRequest, store: Store) -> Dict[str, Any]:
        article = await get_or_404(store, NewsArticle, article_id)
        apply_changes(
            article,
            data.model_dump(exclude_unset=True),
            nullable=frozenset({"excerpt", "featured_image", "published_at"}),
        )
        stamp_publication(article)
        article = await store.save(article)
        logger.info(f"News article updated: {article.slug} ({article.status.value})")
        return AdminNewsItem.model_validate(article).to_json()
    
    @delete("/news/{article_id:uuid}")
    async def delete_news(self, article_id: uuid.UUID, store: Store) -> None:
        article = await get_or_404(store, NewsArticle, article_id)
        await store.delete(article)
        logger.info(f"News article deleted: {article_id}")
    
    # --- Emergency contacts ---
    
    @get("/emergency-contacts")
    async def list_emergency_contacts(self, store: Store) -> List[Dict[str, Any]]:
        """All contacts, active or not."""
        rows = await store.fetch_all(select(EmergencyContact).order_by(EmergencyContact.display_order))
        return dump([AdminEmergencyContactItem.model_validate(r) for r in rows])
    
    @post("/emergency-contacts")
    async def create_emergency_contact(
        self,
        data: EmergencyContactCreateRequest,
        store: Store,
    ) -> Dict[str, Any]:
        contact = await store.insert(EmergencyContact(
            region=data.region,
            name=data.name,
            primary_number=data.primary_number,
            secondary_number=data.secondary_number,
            description=data.description,
            available=data.available,
            display_order=data.order,
            is_active=data.is_active,
        ))
        logger.info(f"Emergency contact created: {contact.region} {contact.primary_number}")
        return AdminEmergencyContactItem.model_validate(contact).to_json()
    
    @patch("/emergency-contacts/{contact_id:uuid}")
    async def update_emergency_contact(
        self,
        contact_id: uuid.UUID,
        data: EmergencyContactUpdateRequest,
        store: Store,
    ) -> Dict[str, Any]:
        contact = await get_or_404(store, EmergencyContact, contact_id)
        apply_changes(
            contact,
            data.model_dump(exclude_unset=True),
            nullable=frozenset({"secondary_number", "description"}),
        )
        contact = await store.save(contact)
        logger.info(f"Emergency contact updated: {contact.region} {contact.primary_number}")
        return AdminEmergencyContactItem.model_validate(contact).to_json()
    
    @delete("/emergency-contacts/{contact_id:uuid}", guards=[require_super_admin_guard])
    async def delete_emergency_contact(self, contact_id: uuid.UUID, store: Store) -> None:
        """Only super admins may remove a hotline."""
        contact = await get_or_404(store, EmergencyContact, contact_id)
        await store.delete(contact)
        logger.warning(f"Emergency contact deleted: {contact.region} {contact.primary_number}")

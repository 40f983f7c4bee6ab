"""Workflow states shared by submission and content tables."""

import enum


class SubmissionStatus(str, enum.Enum):
    """Lifecycle of a citizen submission. New rows always start as PENDING."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ContentStatus(str, enum.Enum):
    """Publication state of CMS content."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

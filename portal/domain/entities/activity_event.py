"""Domain entities describing items of the activity feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ACTIVITY_PROJECT_CREATED = "project_created"
ACTIVITY_PROJECT_COMPLETED = "project_completed"
ACTIVITY_ESTIMATE_REQUESTED = "estimate_requested"
ACTIVITY_ESTIMATE_FINALIZED = "estimate_finalized"
ACTIVITY_ESTIMATE_APPROVED = "estimate_approved"
ACTIVITY_INVOICE_CREATED = "invoice_created"
ACTIVITY_INVOICE_PAID = "invoice_paid"

ACTIVITY_TYPES: tuple[str, ...] = (
    ACTIVITY_PROJECT_CREATED,
    ACTIVITY_PROJECT_COMPLETED,
    ACTIVITY_ESTIMATE_REQUESTED,
    ACTIVITY_ESTIMATE_FINALIZED,
    ACTIVITY_ESTIMATE_APPROVED,
    ACTIVITY_INVOICE_CREATED,
    ACTIVITY_INVOICE_PAID,
)


@dataclass
class ActivityEvent:
    """Immutable record of a business-significant state change."""

    id: str | None
    user_id: str
    activity_type: str
    activity_description: str
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


@dataclass
class FeedUser:
    """Identity of the subject of an activity as shown in the feed."""

    id: str
    first_name: str
    last_name: str
    avatar_url: str | None = None
    organization: str | None = None


@dataclass
class ActivityFeedItem:
    """An :class:`ActivityEvent` enriched with the subject's identity."""

    id: str
    user_id: str
    activity_type: str
    activity_description: str
    metadata: dict[str, Any]
    created_at: datetime | None
    user: FeedUser


@dataclass(frozen=True)
class ActivityStats:
    """Counters over a trailing window of activity."""

    total_activities: int = 0
    recent_projects_created: int = 0
    recent_projects_completed: int = 0
    active_users: int = 0


__all__ = [
    "ACTIVITY_PROJECT_CREATED",
    "ACTIVITY_PROJECT_COMPLETED",
    "ACTIVITY_ESTIMATE_REQUESTED",
    "ACTIVITY_ESTIMATE_FINALIZED",
    "ACTIVITY_ESTIMATE_APPROVED",
    "ACTIVITY_INVOICE_CREATED",
    "ACTIVITY_INVOICE_PAID",
    "ACTIVITY_TYPES",
    "ActivityEvent",
    "ActivityFeedItem",
    "ActivityStats",
    "FeedUser",
]

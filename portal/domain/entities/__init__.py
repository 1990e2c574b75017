"""Domain entities exposed by the application."""

from .activity_event import (
    ACTIVITY_ESTIMATE_APPROVED,
    ACTIVITY_ESTIMATE_FINALIZED,
    ACTIVITY_ESTIMATE_REQUESTED,
    ACTIVITY_INVOICE_CREATED,
    ACTIVITY_INVOICE_PAID,
    ACTIVITY_PROJECT_COMPLETED,
    ACTIVITY_PROJECT_CREATED,
    ACTIVITY_TYPES,
    ActivityEvent,
    ActivityFeedItem,
    ActivityStats,
    FeedUser,
)
from .estimate import (
    ESTIMATE_STATUS_APPROVED,
    ESTIMATE_STATUS_DRAFT,
    ESTIMATE_STATUS_FINALIZED,
    ESTIMATE_STATUS_PENDING,
    ESTIMATE_STATUS_REJECTED,
    ESTIMATE_STATUSES,
    Estimate,
    allowed_transitions,
    check_transition,
)
from .invoice import INVOICE_STATUS_PAID, INVOICE_STATUS_PENDING, Invoice
from .profile import Profile
from .project import (
    PROJECT_STATUS_COMPLETED,
    PROJECT_STATUS_PLANNING,
    PROJECT_STATUSES,
    PROJECT_UPDATABLE_FIELDS,
    Project,
)

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
    "Estimate",
    "ESTIMATE_STATUS_DRAFT",
    "ESTIMATE_STATUS_PENDING",
    "ESTIMATE_STATUS_FINALIZED",
    "ESTIMATE_STATUS_APPROVED",
    "ESTIMATE_STATUS_REJECTED",
    "ESTIMATE_STATUSES",
    "allowed_transitions",
    "check_transition",
    "Invoice",
    "INVOICE_STATUS_PENDING",
    "INVOICE_STATUS_PAID",
    "Profile",
    "Project",
    "PROJECT_STATUS_PLANNING",
    "PROJECT_STATUS_COMPLETED",
    "PROJECT_STATUSES",
    "PROJECT_UPDATABLE_FIELDS",
]

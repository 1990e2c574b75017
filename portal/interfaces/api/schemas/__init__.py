from .activity import (
    ActivityFeedItemRead,
    ActivityStatsRead,
    FeedUserRead,
    RecordActivityRequest,
    RecordActivityResponse,
    SideEffectOutcomeRead,
    SideEffectStatusRead,
)
from .estimate import EstimateApprovalRead, EstimateCreate, EstimateRead, EstimateUpdate
from .invoice import InvoicePaidRead, InvoiceRead
from .project import ProjectCreate, ProjectRead, ProjectUpdate

__all__ = [
    "ActivityFeedItemRead",
    "ActivityStatsRead",
    "FeedUserRead",
    "RecordActivityRequest",
    "RecordActivityResponse",
    "SideEffectOutcomeRead",
    "SideEffectStatusRead",
    "EstimateApprovalRead",
    "EstimateCreate",
    "EstimateRead",
    "EstimateUpdate",
    "InvoicePaidRead",
    "InvoiceRead",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
]

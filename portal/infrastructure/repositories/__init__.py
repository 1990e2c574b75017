"""Repository implementations for infrastructure layer."""

from .activity_repository import ActivityRepository
from .estimate_repository import EstimateRepository
from .invoice_repository import InvoiceRepository
from .profile_repository import ProfileRepository
from .project_repository import ProjectRepository

__all__ = [
    "ActivityRepository",
    "EstimateRepository",
    "InvoiceRepository",
    "ProfileRepository",
    "ProjectRepository",
]

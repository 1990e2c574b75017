"""ORM models used by the application infrastructure."""

from .activity import ActivityModel
from .estimate import EstimateModel
from .invoice import InvoiceModel
from .profile import ProfileModel
from .project import ProjectModel

__all__ = [
    "ActivityModel",
    "EstimateModel",
    "InvoiceModel",
    "ProfileModel",
    "ProjectModel",
]

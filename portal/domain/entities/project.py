"""Domain entity representing a client project."""

from dataclasses import dataclass
from datetime import datetime

PROJECT_STATUS_PLANNING = "planning"
PROJECT_STATUS_IN_PROGRESS = "in_progress"
PROJECT_STATUS_REVIEW = "review"
PROJECT_STATUS_COMPLETED = "completed"

PROJECT_STATUSES = (
    PROJECT_STATUS_PLANNING,
    PROJECT_STATUS_IN_PROGRESS,
    PROJECT_STATUS_REVIEW,
    PROJECT_STATUS_COMPLETED,
)

# Fields an administrator may change through a project update.
PROJECT_UPDATABLE_FIELDS = (
    "title",
    "description",
    "status",
    "deadline",
    "live_preview_url",
    "repo_url",
)


@dataclass
class Project:
    """Work delivered by the agency for a client."""

    id: int | None
    user_id: str
    title: str
    description: str | None
    status: str
    deadline: str | None = None
    live_preview_url: str | None = None
    repo_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "Project",
    "PROJECT_STATUS_PLANNING",
    "PROJECT_STATUS_IN_PROGRESS",
    "PROJECT_STATUS_REVIEW",
    "PROJECT_STATUS_COMPLETED",
    "PROJECT_STATUSES",
    "PROJECT_UPDATABLE_FIELDS",
]

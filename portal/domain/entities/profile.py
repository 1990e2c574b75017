"""Domain entity representing a portal user profile."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Profile:
    """Profile data mirrored from the identity provider."""

    id: str
    first_name: str | None
    last_name: str | None
    email: str | None
    avatar_url: str | None = None
    organization: str | None = None
    is_admin: bool = False
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        """Return ``first_name last_name`` skipping missing parts."""

        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts)

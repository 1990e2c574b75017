"""SQLAlchemy model for client projects."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from portal.infrastructure.database import Base
from portal.utils import now_in_app_naive_datetime


class ProjectModel(Base):
    """Database representation of a project."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(30), nullable=False, default="planning")
    deadline = Column(String(30), nullable=True)
    live_preview_url = Column(String(500), nullable=True)
    repo_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["ProjectModel"]

"""SQLAlchemy model for the append-only activity feed table."""

import uuid

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Index, String, Text

from portal.domain.entities import ACTIVITY_TYPES
from portal.infrastructure.database import Base
from portal.utils import now_in_app_naive_datetime

_ACTIVITY_TYPE_VALUES = ", ".join(f"'{value}'" for value in ACTIVITY_TYPES)


def _new_activity_id() -> str:
    return str(uuid.uuid4())


class ActivityModel(Base):
    """Database representation of an activity feed row."""

    __tablename__ = "recent_activity"
    __table_args__ = (
        CheckConstraint(
            f"activity_type IN ({_ACTIVITY_TYPE_VALUES})",
            name="ck_recent_activity_type",
        ),
        Index("idx_recent_activity_created_at", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=_new_activity_id)
    user_id = Column(String(64), nullable=False, index=True)
    activity_type = Column(String(40), nullable=False, index=True)
    activity_description = Column(Text, nullable=False)
    # ``metadata`` is reserved by the declarative base.
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ActivityModel"]

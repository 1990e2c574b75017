"""Persistence helpers for the activity feed table."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from portal.domain.entities import ActivityEvent
from portal.infrastructure.models import ActivityModel
from portal.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class ActivityRepository:
    """Insert and select :class:`ActivityEvent` rows.

    Rows are append-only; there is no update or delete method.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, event: ActivityEvent) -> ActivityEvent:
        model = ActivityModel(
            user_id=event.user_id,
            activity_type=event.activity_type,
            activity_description=event.activity_description,
            metadata_=dict(event.metadata or {}),
            created_at=ensure_app_naive_datetime(
                event.created_at or now_in_app_timezone()
            ),
        )
        if event.id:
            model.id = event.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_recent(self, *, limit: int = 20, offset: int = 0) -> Sequence[ActivityEvent]:
        query = (
            self.session.query(ActivityModel)
            .order_by(ActivityModel.created_at.desc(), ActivityModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_since(self, since: datetime, *, activity_type: str | None = None) -> int:
        query = self.session.query(func.count(ActivityModel.id)).filter(
            ActivityModel.created_at >= ensure_app_naive_datetime(since)
        )
        if activity_type is not None:
            query = query.filter(ActivityModel.activity_type == activity_type)
        return int(query.scalar() or 0)

    def count_users_since(self, since: datetime) -> int:
        query = self.session.query(
            func.count(func.distinct(ActivityModel.user_id))
        ).filter(ActivityModel.created_at >= ensure_app_naive_datetime(since))
        return int(query.scalar() or 0)

    @staticmethod
    def _to_entity(model: ActivityModel) -> ActivityEvent:
        return ActivityEvent(
            id=model.id,
            user_id=model.user_id,
            activity_type=model.activity_type,
            activity_description=model.activity_description,
            metadata=dict(model.metadata_ or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ActivityRepository"]

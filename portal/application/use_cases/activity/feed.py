"""Read the reverse-chronological activity feed."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import timedelta
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.domain.entities import (
    ACTIVITY_PROJECT_COMPLETED,
    ACTIVITY_PROJECT_CREATED,
    ActivityEvent,
    ActivityFeedItem,
    ActivityStats,
    FeedUser,
    Profile,
)
from portal.infrastructure.repositories import ActivityRepository, ProfileRepository
from portal.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

UNKNOWN_FIRST_NAME = "Unknown"
DEFAULT_FEED_LIMIT = 20
STATS_WINDOW_DAYS = 30


def split_user_name(user_name: Any) -> tuple[str | None, str | None]:
    """Split ``user_name`` on its first space into ``(first, last)``."""

    if not isinstance(user_name, str) or not user_name.strip():
        return None, None
    first, _, last = user_name.strip().partition(" ")
    return first, last.strip() or None


def build_feed_user(
    user_id: str, metadata: Mapping[str, Any], profile: Profile | None = None
) -> FeedUser:
    """Merge the current profile with the identity frozen in ``metadata``.

    Each field prefers the profile, then the metadata, then a placeholder.
    """

    meta_first, meta_last = split_user_name(metadata.get("user_name"))
    meta_avatar = metadata.get("user_avatar") or None

    if profile is None:
        return FeedUser(
            id=user_id,
            first_name=meta_first or UNKNOWN_FIRST_NAME,
            last_name=meta_last or "",
            avatar_url=meta_avatar,
            organization=None,
        )

    return FeedUser(
        id=user_id,
        first_name=profile.first_name or meta_first or UNKNOWN_FIRST_NAME,
        last_name=profile.last_name or meta_last or "",
        avatar_url=profile.avatar_url or meta_avatar,
        organization=profile.organization or None,
    )


def _to_feed_item(event: ActivityEvent, profile: Profile | None) -> ActivityFeedItem:
    metadata = dict(event.metadata or {})
    return ActivityFeedItem(
        id=event.id or "",
        user_id=event.user_id,
        activity_type=event.activity_type,
        activity_description=event.activity_description,
        metadata=metadata,
        created_at=event.created_at,
        user=build_feed_user(event.user_id, metadata, profile),
    )


class ActivityFeedReader:
    """Serve paginated activity enriched with profile data.

    The feed is visible to every authenticated user. Nothing is cached; each
    call reads the store again.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get_activity_feed(
        self, limit: int = DEFAULT_FEED_LIMIT, offset: int = 0
    ) -> list[ActivityFeedItem]:
        """Return at most ``limit`` items newest first, starting at ``offset``.

        A store error while reading activity yields an empty page. A failing
        profile lookup degrades every item to the identity in its metadata.
        """

        if limit <= 0:
            return []
        offset = max(offset, 0)

        try:
            session = self._session_factory()
        except SQLAlchemyError:
            logger.exception("Error opening a session for the activity feed")
            return []

        try:
            try:
                activities = ActivityRepository(session).list_recent(
                    limit=limit, offset=offset
                )
            except SQLAlchemyError:
                session.rollback()
                logger.exception("Error fetching activity feed")
                return []

            if not activities:
                return []

            profiles = self._load_profiles(session, activities)
        finally:
            session.close()

        return [
            _to_feed_item(activity, profiles.get(activity.user_id))
            for activity in activities
        ]

    def get_activity_stats(self, days: int = STATS_WINDOW_DAYS) -> ActivityStats:
        """Return counters over the trailing ``days``; zeros on store error."""

        since = now_in_app_timezone() - timedelta(days=days)
        session = None
        try:
            session = self._session_factory()
            repository = ActivityRepository(session)
            return ActivityStats(
                total_activities=repository.count_since(since),
                recent_projects_created=repository.count_since(
                    since, activity_type=ACTIVITY_PROJECT_CREATED
                ),
                recent_projects_completed=repository.count_since(
                    since, activity_type=ACTIVITY_PROJECT_COMPLETED
                ),
                active_users=repository.count_users_since(since),
            )
        except SQLAlchemyError:
            logger.exception("Error fetching activity stats")
            return ActivityStats()
        finally:
            if session is not None:
                session.close()

    @staticmethod
    def _load_profiles(
        session: Session, activities: Sequence[ActivityEvent]
    ) -> dict[str, Profile]:
        user_ids = list(dict.fromkeys(activity.user_id for activity in activities))
        try:
            return ProfileRepository(session).get_map_by_ids(user_ids)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Error fetching profiles for activity feed")
            return {}


__all__ = [
    "ActivityFeedReader",
    "build_feed_user",
    "split_user_name",
    "UNKNOWN_FIRST_NAME",
    "DEFAULT_FEED_LIMIT",
]

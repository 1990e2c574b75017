"""Endpoints providing the recent activity feed."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from portal.application.use_cases.activity import (
    ActivityFeedReader,
    ActivityRecorder,
)
from portal.application.use_cases.activity.feed import DEFAULT_FEED_LIMIT
from portal.domain.entities import (
    ACTIVITY_PROJECT_COMPLETED,
    ACTIVITY_PROJECT_CREATED,
    ActivityFeedItem,
    Profile,
)
from portal.infrastructure.side_effects import SideEffectQueue
from portal.interfaces.api.dependencies import (
    get_activity_recorder,
    get_current_user,
    get_feed_reader,
    get_side_effects,
    require_admin,
)
from portal.interfaces.api.schemas import (
    ActivityFeedItemRead,
    ActivityStatsRead,
    RecordActivityRequest,
    RecordActivityResponse,
    SideEffectOutcomeRead,
    SideEffectStatusRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/activity", tags=["activity"])
admin_router = APIRouter(prefix="/admin", tags=["admin"])

_MANUAL_ACTIVITY_TYPES = (ACTIVITY_PROJECT_CREATED, ACTIVITY_PROJECT_COMPLETED)


def _item_to_schema(item: ActivityFeedItem) -> ActivityFeedItemRead:
    return ActivityFeedItemRead.model_validate(item)


@router.get("/feed", response_model=list[ActivityFeedItemRead])
def read_activity_feed(
    limit: int = Query(
        DEFAULT_FEED_LIMIT, ge=1, le=100, description="Maximum number of activities to return"
    ),
    offset: int = Query(0, ge=0, description="Number of newest activities to skip"),
    reader: ActivityFeedReader = Depends(get_feed_reader),
    _: Profile = Depends(get_current_user),
) -> list[ActivityFeedItemRead]:
    """Return the newest activities, enriched with their subject's identity."""

    items = reader.get_activity_feed(limit=limit, offset=offset)
    return [_item_to_schema(item) for item in items]


@router.get("/stats", response_model=ActivityStatsRead)
def read_activity_stats(
    reader: ActivityFeedReader = Depends(get_feed_reader),
    _: Profile = Depends(get_current_user),
) -> ActivityStatsRead:
    """Return activity counters for the last 30 days."""

    return ActivityStatsRead.model_validate(reader.get_activity_stats())


@admin_router.post("/activity", response_model=RecordActivityResponse)
def record_activity(
    payload: RecordActivityRequest,
    recorder: ActivityRecorder = Depends(get_activity_recorder),
    current_admin: Profile = Depends(require_admin),
) -> RecordActivityResponse:
    """Record a project activity on behalf of the calling administrator."""

    if payload.activity_type not in _MANUAL_ACTIVITY_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                "Unsupported activity type. Supported: "
                + ", ".join(_MANUAL_ACTIVITY_TYPES)
            ),
        )

    user_name = f"{current_admin.first_name or 'Admin'} {current_admin.last_name or 'User'}"
    if payload.activity_type == ACTIVITY_PROJECT_CREATED:
        record = recorder.record_project_created
    else:
        record = recorder.record_project_completed

    success = record(
        current_admin.id,
        payload.project_id,
        payload.project_title,
        user_name,
        current_admin.avatar_url,
    )
    if not success:
        logger.warning(
            "Manual activity %s for project %s was not recorded",
            payload.activity_type,
            payload.project_id,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record activity",
        )

    return RecordActivityResponse(
        message=f"Activity recorded: {payload.activity_type}",
        user_id=current_admin.id,
        activity_type=payload.activity_type,
        project_id=payload.project_id,
        project_title=payload.project_title,
        user_name=user_name,
    )


@admin_router.get("/side-effects", response_model=SideEffectStatusRead)
def read_side_effect_status(
    side_effects: SideEffectQueue = Depends(get_side_effects),
    _: Profile = Depends(require_admin),
) -> SideEffectStatusRead:
    """Return counters and the most recent outcomes of queued side effects."""

    status_data = side_effects.get_status()
    return SideEffectStatusRead(
        **status_data,
        recent=[
            SideEffectOutcomeRead.model_validate(outcome)
            for outcome in side_effects.history()
        ],
    )


__all__ = ["router", "admin_router"]

"""Pydantic schemas for activity feed endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class FeedUserRead(BaseModel):
    id: str
    first_name: str = Field(..., description="Profile first name, or a fallback")
    last_name: str = Field("", description="Profile last name, or a fallback")
    avatar_url: str | None = None
    organization: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ActivityFeedItemRead(BaseModel):
    id: str = Field(..., description="Unique identifier of the activity")
    user_id: str = Field(..., description="Profile the activity belongs to")
    activity_type: str = Field(..., description="Kind of activity reported")
    activity_description: str = Field(..., description="Human readable summary")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional information captured with the activity",
    )
    created_at: datetime | None = Field(None, description="Moment the activity happened")
    user: FeedUserRead

    model_config = ConfigDict(from_attributes=True)


class ActivityStatsRead(BaseModel):
    total_activities: int
    recent_projects_created: int
    recent_projects_completed: int
    active_users: int

    model_config = ConfigDict(from_attributes=True)


class RecordActivityRequest(BaseModel):
    """Manual activity entry recorded on behalf of the calling administrator."""

    activity_type: str = Field(..., min_length=1)
    project_id: int | str
    project_title: str = Field(..., min_length=1)


class RecordActivityResponse(BaseModel):
    success: Literal[True] = True
    message: str
    user_id: str
    activity_type: str
    project_id: int | str
    project_title: str
    user_name: str


class SideEffectOutcomeRead(BaseModel):
    name: str
    succeeded: bool
    error: str | None = None
    finished_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SideEffectStatusRead(BaseModel):
    running: bool
    pending: int
    succeeded: int
    failed: int
    recent: list[SideEffectOutcomeRead] = Field(default_factory=list)


__all__ = [
    "ActivityFeedItemRead",
    "ActivityStatsRead",
    "FeedUserRead",
    "RecordActivityRequest",
    "RecordActivityResponse",
    "SideEffectOutcomeRead",
    "SideEffectStatusRead",
]

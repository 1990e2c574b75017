"""Schemas for project endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProjectCreate(BaseModel):
    """Payload required to create a project for a client."""

    user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str | None = None
    status: str = "planning"
    deadline: str | None = None
    live_preview_url: str | None = None
    repo_url: str | None = None


class ProjectUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    status: str | None = None
    deadline: str | None = None
    live_preview_url: str | None = None
    repo_url: str | None = None

    model_config = ConfigDict(extra="forbid")


class ProjectRead(BaseModel):
    id: int
    user_id: str
    title: str
    description: str | None
    status: str
    deadline: str | None
    live_preview_url: str | None
    repo_url: str | None
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["ProjectCreate", "ProjectRead", "ProjectUpdate"]

"""Use cases for creating and updating client projects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from portal.application.use_cases.activity import ActivityRecorder
from portal.application.use_cases.notifications import (
    notify_project_completed,
    notify_project_created,
)
from portal.domain.entities import (
    PROJECT_STATUS_COMPLETED,
    PROJECT_STATUS_PLANNING,
    PROJECT_STATUSES,
    PROJECT_UPDATABLE_FIELDS,
    Project,
)
from portal.domain.errors import EntityNotFoundError, ValidationFailedError
from portal.infrastructure.repositories import ProjectRepository
from portal.infrastructure.side_effects import SideEffectQueue


def _ensure_status(status: str) -> str:
    if status not in PROJECT_STATUSES:
        raise ValidationFailedError(f"Invalid project status '{status}'")
    return status


def create_project(
    session: Session,
    *,
    user_id: str,
    title: str,
    description: str | None = None,
    status: str = PROJECT_STATUS_PLANNING,
    deadline: str | None = None,
    live_preview_url: str | None = None,
    repo_url: str | None = None,
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> Project:
    """Create a project for ``user_id`` and announce it."""

    if not title or not title.strip():
        raise ValidationFailedError("Title cannot be empty")

    project = ProjectRepository(session).create(
        Project(
            id=None,
            user_id=user_id,
            title=title.strip(),
            description=description,
            status=_ensure_status(status),
            deadline=deadline,
            live_preview_url=live_preview_url,
            repo_url=repo_url,
        )
    )

    notify_project_created(
        session, project=project, recorder=recorder, side_effects=side_effects
    )
    return project


def clean_project_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Keep updatable fields only; empty strings clear optional fields."""

    cleaned: dict[str, Any] = {}
    for key, value in changes.items():
        if key not in PROJECT_UPDATABLE_FIELDS:
            continue
        cleaned[key] = None if value == "" else value
    return cleaned


def update_project(
    session: Session,
    *,
    project_id: int,
    changes: Mapping[str, Any],
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> Project:
    """Apply ``changes`` and fire completion side effects on ``-> completed``."""

    repository = ProjectRepository(session)
    current = repository.get(project_id)
    if current is None:
        raise EntityNotFoundError("Project not found")

    cleaned = clean_project_changes(changes)
    if "title" in cleaned and not (cleaned["title"] or "").strip():
        raise ValidationFailedError("Title cannot be empty")
    if "status" in cleaned:
        if cleaned["status"] is None:
            raise ValidationFailedError("Status cannot be empty")
        _ensure_status(cleaned["status"])

    saved = repository.update(replace(current, **cleaned))

    if saved.status == PROJECT_STATUS_COMPLETED and current.status != PROJECT_STATUS_COMPLETED:
        notify_project_completed(
            session, project=saved, recorder=recorder, side_effects=side_effects
        )
    return saved


__all__ = ["create_project", "update_project", "clean_project_changes"]

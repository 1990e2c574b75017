"""Endpoints for managing client projects."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portal.application.use_cases import (
    create_project as create_project_uc,
    update_project as update_project_uc,
)
from portal.application.use_cases.activity import ActivityRecorder
from portal.domain.entities import Profile, Project
from portal.domain.errors import PortalError
from portal.infrastructure.database import get_db
from portal.infrastructure.side_effects import SideEffectQueue
from portal.interfaces.api.dependencies import (
    get_activity_recorder,
    get_side_effects,
    require_admin,
)
from portal.interfaces.api.routes_helpers import to_http_exception
from portal.interfaces.api.schemas import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])


def _to_read_model(project: Project) -> ProjectRead:
    return ProjectRead.model_validate(project)


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
    side_effects: SideEffectQueue = Depends(get_side_effects),
    _: Profile = Depends(require_admin),
) -> ProjectRead:
    """Create a project and notify its client."""

    try:
        project = create_project_uc(
            db,
            user_id=payload.user_id,
            title=payload.title,
            description=payload.description,
            status=payload.status,
            deadline=payload.deadline,
            live_preview_url=payload.live_preview_url,
            repo_url=payload.repo_url,
            recorder=recorder,
            side_effects=side_effects,
        )
    except PortalError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(project)


@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
    side_effects: SideEffectQueue = Depends(get_side_effects),
    _: Profile = Depends(require_admin),
) -> ProjectRead:
    """Update a project; completing it notifies the client."""

    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update",
        )

    try:
        project = update_project_uc(
            db,
            project_id=project_id,
            changes=changes,
            recorder=recorder,
            side_effects=side_effects,
        )
    except PortalError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(project)


__all__ = ["router"]

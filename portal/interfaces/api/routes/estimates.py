"""Endpoints covering the estimate workflow."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portal.application.use_cases import (
    approve_estimate as approve_estimate_uc,
    create_estimate as create_estimate_uc,
    reject_estimate as reject_estimate_uc,
    update_estimate as update_estimate_uc,
)
from portal.application.use_cases.activity import ActivityRecorder
from portal.domain.entities import Estimate, Profile
from portal.domain.errors import PortalError
from portal.infrastructure.database import get_db
from portal.infrastructure.side_effects import SideEffectQueue
from portal.interfaces.api.dependencies import (
    get_activity_recorder,
    get_current_user,
    get_side_effects,
)
from portal.interfaces.api.routes_helpers import to_http_exception
from portal.interfaces.api.schemas import (
    EstimateApprovalRead,
    EstimateCreate,
    EstimateRead,
    EstimateUpdate,
    InvoiceRead,
)

router = APIRouter(prefix="/estimates", tags=["estimates"])


def _to_read_model(estimate: Estimate) -> EstimateRead:
    return EstimateRead.model_validate(estimate)


@router.post("", response_model=EstimateRead, status_code=status.HTTP_201_CREATED)
def create_estimate(
    payload: EstimateCreate,
    db: Session = Depends(get_db),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
    side_effects: SideEffectQueue = Depends(get_side_effects),
    current_user: Profile = Depends(get_current_user),
) -> EstimateRead:
    """Request an estimate, or prepare a finalized one for a client (admins)."""

    try:
        estimate = create_estimate_uc(
            db,
            actor_id=current_user.id,
            actor_is_admin=current_user.is_admin,
            **payload.model_dump(),
            recorder=recorder,
            side_effects=side_effects,
        )
    except PortalError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(estimate)


@router.put("/{estimate_id}", response_model=EstimateRead)
def update_estimate(
    estimate_id: int,
    payload: EstimateUpdate,
    db: Session = Depends(get_db),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
    side_effects: SideEffectQueue = Depends(get_side_effects),
    current_user: Profile = Depends(get_current_user),
) -> EstimateRead:
    try:
        estimate = update_estimate_uc(
            db,
            estimate_id=estimate_id,
            actor_id=current_user.id,
            actor_is_admin=current_user.is_admin,
            changes=payload.model_dump(exclude_unset=True),
            recorder=recorder,
            side_effects=side_effects,
        )
    except PortalError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(estimate)


@router.post("/{estimate_id}/approve", response_model=EstimateApprovalRead)
def approve_estimate(
    estimate_id: int,
    db: Session = Depends(get_db),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
    side_effects: SideEffectQueue = Depends(get_side_effects),
    current_user: Profile = Depends(get_current_user),
) -> EstimateApprovalRead:
    """Approve a finalized estimate; an invoice is issued for it."""

    try:
        estimate, invoice = approve_estimate_uc(
            db,
            estimate_id=estimate_id,
            actor_id=current_user.id,
            recorder=recorder,
            side_effects=side_effects,
        )
    except PortalError as exc:
        raise to_http_exception(exc) from exc
    return EstimateApprovalRead(
        message="Estimate approved and invoice created",
        estimate=_to_read_model(estimate),
        invoice=InvoiceRead.model_validate(invoice),
    )


@router.post("/{estimate_id}/reject", response_model=EstimateRead)
def reject_estimate(
    estimate_id: int,
    db: Session = Depends(get_db),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
    side_effects: SideEffectQueue = Depends(get_side_effects),
    current_user: Profile = Depends(get_current_user),
) -> EstimateRead:
    try:
        estimate = reject_estimate_uc(
            db,
            estimate_id=estimate_id,
            actor_id=current_user.id,
            recorder=recorder,
            side_effects=side_effects,
        )
    except PortalError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(estimate)


__all__ = ["router"]

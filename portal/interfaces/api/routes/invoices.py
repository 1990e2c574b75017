"""Endpoints for settling invoices."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portal.application.use_cases import mark_invoice_paid as mark_invoice_paid_uc
from portal.application.use_cases.activity import ActivityRecorder
from portal.domain.entities import Profile
from portal.domain.errors import PortalError
from portal.infrastructure.database import get_db
from portal.infrastructure.side_effects import SideEffectQueue
from portal.interfaces.api.dependencies import (
    get_activity_recorder,
    get_side_effects,
    require_admin,
)
from portal.interfaces.api.routes_helpers import to_http_exception
from portal.interfaces.api.schemas import InvoicePaidRead, InvoiceRead

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.post("/{invoice_id}/mark-paid", response_model=InvoicePaidRead)
def mark_invoice_paid(
    invoice_id: int,
    db: Session = Depends(get_db),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
    side_effects: SideEffectQueue = Depends(get_side_effects),
    _: Profile = Depends(require_admin),
) -> InvoicePaidRead:
    """Record a payment received outside the portal and start the project."""

    try:
        invoice, project = mark_invoice_paid_uc(
            db,
            invoice_id=invoice_id,
            recorder=recorder,
            side_effects=side_effects,
        )
    except PortalError as exc:
        raise to_http_exception(exc) from exc
    return InvoicePaidRead(
        invoice=InvoiceRead.model_validate(invoice),
        project_id=project.id if project is not None else None,
    )


__all__ = ["router"]

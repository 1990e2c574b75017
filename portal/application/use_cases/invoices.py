"""Use cases for settling invoices."""

from __future__ import annotations

import logging
from dataclasses import replace

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.application.use_cases.activity import ActivityRecorder
from portal.application.use_cases.notifications import (
    notify_invoice_paid,
    notify_project_created,
)
from portal.domain.entities import (
    INVOICE_STATUS_PAID,
    PROJECT_STATUS_PLANNING,
    Invoice,
    Project,
)
from portal.domain.errors import EntityNotFoundError, ValidationFailedError
from portal.infrastructure.repositories import (
    EstimateRepository,
    InvoiceRepository,
    ProjectRepository,
)
from portal.infrastructure.side_effects import SideEffectQueue
from portal.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def mark_invoice_paid(
    session: Session,
    *,
    invoice_id: int,
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> tuple[Invoice, Project | None]:
    """Mark a pending invoice as paid and start the project it pays for.

    The project is created from the estimate's title and description. A
    failure to create it is logged and does not undo the payment.
    """

    invoices = InvoiceRepository(session)
    invoice = invoices.get(invoice_id)
    if invoice is None:
        raise EntityNotFoundError("Invoice not found")
    if invoice.status == INVOICE_STATUS_PAID:
        raise ValidationFailedError("Invoice has already been paid")

    estimate = EstimateRepository(session).get(invoice.estimate_id)
    if estimate is None:
        raise EntityNotFoundError("Estimate for invoice not found")

    paid = invoices.update(
        replace(invoice, status=INVOICE_STATUS_PAID, paid_at=now_in_app_timezone())
    )
    logger.info("Invoice %s marked as paid", paid.id)

    project: Project | None = None
    try:
        project = ProjectRepository(session).create(
            Project(
                id=None,
                user_id=paid.user_id,
                title=estimate.title,
                description=estimate.description,
                status=PROJECT_STATUS_PLANNING,
            )
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error creating project for invoice %s", paid.id)

    notify_invoice_paid(
        session,
        invoice=paid,
        estimate=estimate,
        project=project,
        recorder=recorder,
        side_effects=side_effects,
    )
    if project is not None:
        notify_project_created(
            session, project=project, recorder=recorder, side_effects=side_effects
        )
    return paid, project


__all__ = ["mark_invoice_paid"]

"""Use cases covering the estimate workflow.

Every status change is validated against the single transition table in
:mod:`portal.domain.entities.estimate`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.application.use_cases.activity import ActivityRecorder
from portal.application.use_cases.notifications import (
    notify_estimate_status,
    notify_invoice_created,
)
from portal.config import get_settings
from portal.domain.entities import (
    ESTIMATE_STATUS_APPROVED,
    ESTIMATE_STATUS_DRAFT,
    ESTIMATE_STATUS_FINALIZED,
    ESTIMATE_STATUS_PENDING,
    ESTIMATE_STATUS_REJECTED,
    INVOICE_STATUS_PENDING,
    Estimate,
    Invoice,
    check_transition,
)
from portal.domain.errors import (
    EntityNotFoundError,
    EstimateTransitionError,
    OperationFailedError,
    PermissionDeniedError,
    ValidationFailedError,
)
from portal.infrastructure.repositories import EstimateRepository, InvoiceRepository
from portal.infrastructure.side_effects import SideEffectQueue
from portal.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

_USER_EDITABLE_FIELDS = (
    "title",
    "description",
    "price_min_cents",
    "price_max_cents",
    "timeline",
)
_ADMIN_EDITABLE_FIELDS = _USER_EDITABLE_FIELDS + ("final_price_cents", "tax_rate")


def _validate_price_range(price_min: int | None, price_max: int | None) -> None:
    if price_min and price_max and price_min > price_max:
        raise ValidationFailedError(
            "Minimum price cannot be greater than maximum price"
        )


def _strip_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def calculate_invoice_total(pre_tax_cents: int, tax_rate: float) -> tuple[int, int]:
    """Return ``(tax_cents, total_cents)`` rounding half up to the cent."""

    tax = (Decimal(pre_tax_cents) * Decimal(str(tax_rate)) / Decimal(100)).quantize(
        Decimal(1), rounding=ROUND_HALF_UP
    )
    tax_cents = int(tax)
    return tax_cents, pre_tax_cents + tax_cents


def create_estimate(
    session: Session,
    *,
    actor_id: str,
    actor_is_admin: bool,
    title: str,
    description: str | None = None,
    timeline: str | None = None,
    price_min_cents: int | None = None,
    price_max_cents: int | None = None,
    final_price_cents: int | None = None,
    tax_rate: float | None = None,
    status: str | None = None,
    user_id: str | None = None,
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> Estimate:
    """Create an estimate request, or a finalized estimate prepared by an admin.

    An administrator passing ``user_id`` creates a finalized estimate for that
    client; everyone else requests an estimate for themselves.
    """

    if not title or not title.strip():
        raise ValidationFailedError("Title is required")

    if actor_is_admin and user_id:
        if not final_price_cents:
            raise ValidationFailedError("Final price is required for admin estimates")
        estimate = Estimate(
            id=None,
            user_id=user_id,
            title=title.strip(),
            description=_strip_or_none(description),
            timeline=_strip_or_none(timeline),
            status=ESTIMATE_STATUS_FINALIZED,
            final_price_cents=final_price_cents,
            tax_rate=tax_rate or 0.0,
            finalized_at=now_in_app_timezone(),
        )
    else:
        requested_status = status or ESTIMATE_STATUS_PENDING
        if requested_status not in (ESTIMATE_STATUS_DRAFT, ESTIMATE_STATUS_PENDING):
            raise ValidationFailedError("New estimates must be draft or pending")
        _validate_price_range(price_min_cents, price_max_cents)
        estimate = Estimate(
            id=None,
            user_id=actor_id,
            title=title.strip(),
            description=_strip_or_none(description),
            timeline=_strip_or_none(timeline),
            status=requested_status,
            price_min_cents=price_min_cents or None,
            price_max_cents=price_max_cents or None,
        )

    saved = EstimateRepository(session).create(estimate)
    notify_estimate_status(
        session,
        estimate=saved,
        recorder=recorder,
        side_effects=side_effects,
        send_email=True,
    )
    return saved


def update_estimate(
    session: Session,
    *,
    estimate_id: int,
    actor_id: str,
    actor_is_admin: bool,
    changes: Mapping[str, Any],
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> Estimate:
    """Edit an estimate and move it through the workflow.

    Owners may edit their own drafts and submit them for review; admins may
    edit any estimate and apply any transition the table allows.
    """

    repository = EstimateRepository(session)
    current = repository.get(estimate_id)
    if current is None:
        raise EntityNotFoundError("Estimate not found")

    is_owner = current.user_id == actor_id
    if not (actor_is_admin or (is_owner and current.status == ESTIMATE_STATUS_DRAFT)):
        raise PermissionDeniedError("You can only edit your own draft estimates")

    editable = _ADMIN_EDITABLE_FIELDS if actor_is_admin else _USER_EDITABLE_FIELDS
    updates: dict[str, Any] = {
        key: value for key, value in changes.items() if key in editable
    }

    if "title" in updates:
        if not (updates["title"] or "").strip():
            raise ValidationFailedError("Title cannot be empty")
        updates["title"] = updates["title"].strip()
    for key in ("description", "timeline"):
        if key in updates:
            updates[key] = _strip_or_none(updates[key])
    for key in ("price_min_cents", "price_max_cents", "final_price_cents"):
        if key in updates:
            updates[key] = updates[key] or None
    if "tax_rate" in updates:
        updates["tax_rate"] = updates["tax_rate"] or 0.0

    updated = replace(current, **updates)
    _validate_price_range(updated.price_min_cents, updated.price_max_cents)

    target = changes.get("status")
    status_changed = False
    if target is not None:
        if not actor_is_admin and target != ESTIMATE_STATUS_PENDING:
            raise PermissionDeniedError("Only administrators can change this status")
        status_changed = check_transition(updated, target)
        if status_changed:
            updated = replace(updated, status=target)
            if target == ESTIMATE_STATUS_FINALIZED:
                updated = replace(updated, finalized_at=now_in_app_timezone())

    saved = repository.update(updated)

    if status_changed:
        notify_estimate_status(
            session, estimate=saved, recorder=recorder, side_effects=side_effects
        )
    return saved


def _get_owned_estimate(session: Session, estimate_id: int, actor_id: str, verb: str) -> Estimate:
    estimate = EstimateRepository(session).get(estimate_id)
    if estimate is None:
        raise EntityNotFoundError("Estimate not found")
    if estimate.user_id != actor_id:
        raise PermissionDeniedError(f"You can only {verb} your own estimates")
    return estimate


def approve_estimate(
    session: Session,
    *,
    estimate_id: int,
    actor_id: str,
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> tuple[Estimate, Invoice]:
    """Approve a finalized estimate and issue its invoice.

    If the invoice cannot be stored the approval is reverted and
    :class:`OperationFailedError` is raised.
    """

    settings = get_settings()
    repository = EstimateRepository(session)
    current = _get_owned_estimate(session, estimate_id, actor_id, "approve")
    if not check_transition(current, ESTIMATE_STATUS_APPROVED):
        raise EstimateTransitionError("Estimate has already been approved")

    approved = repository.update(
        replace(current, status=ESTIMATE_STATUS_APPROVED, approved_by_user=True)
    )

    pre_tax = approved.final_price_cents or 0
    _, total = calculate_invoice_total(pre_tax, settings.default_tax_rate)
    try:
        invoice = InvoiceRepository(session).create(
            Invoice(
                id=None,
                estimate_id=approved.id,
                user_id=approved.user_id,
                final_price_cents=total,
                tax_rate=settings.default_tax_rate,
                status=INVOICE_STATUS_PENDING,
                due_date=now_in_app_timezone() + timedelta(days=settings.invoice_due_days),
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Error creating invoice for estimate %s", estimate_id)
        repository.update(current)
        raise OperationFailedError(
            "Failed to process estimate approval. Please try again."
        ) from exc

    notify_estimate_status(
        session, estimate=approved, recorder=recorder, side_effects=side_effects
    )
    notify_invoice_created(
        session,
        invoice=invoice,
        estimate=approved,
        recorder=recorder,
        side_effects=side_effects,
    )
    return approved, invoice


def reject_estimate(
    session: Session,
    *,
    estimate_id: int,
    actor_id: str,
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> Estimate:
    """Reject a finalized estimate that has not been approved yet."""

    current = _get_owned_estimate(session, estimate_id, actor_id, "reject")
    if not check_transition(current, ESTIMATE_STATUS_REJECTED):
        raise EstimateTransitionError("Estimate has already been rejected")

    rejected = EstimateRepository(session).update(
        replace(current, status=ESTIMATE_STATUS_REJECTED)
    )
    notify_estimate_status(
        session, estimate=rejected, recorder=recorder, side_effects=side_effects
    )
    return rejected


__all__ = [
    "approve_estimate",
    "calculate_invoice_total",
    "create_estimate",
    "reject_estimate",
    "update_estimate",
]

"""Side effects fired after a committed project, estimate or invoice mutation.

Each helper resolves the subject's profile, then submits the email and the
activity record to the side-effect queue. Nothing here raises: by the time
these run the primary mutation is already committed.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.application.use_cases.activity import ActivityRecorder
from portal.config import get_settings
from portal.domain.entities import (
    ESTIMATE_STATUS_APPROVED,
    ESTIMATE_STATUS_FINALIZED,
    ESTIMATE_STATUS_PENDING,
    ESTIMATE_STATUS_REJECTED,
    Estimate,
    Invoice,
    Profile,
    Project,
)
from portal.infrastructure.email import (
    send_estimate_created_email,
    send_invoice_created_email,
    send_project_completed_email,
    send_project_created_email,
)
from portal.infrastructure.repositories import ProfileRepository
from portal.infrastructure.side_effects import SideEffectQueue

logger = logging.getLogger(__name__)


def _resolve_subject(session: Session, user_id: str) -> Profile | None:
    try:
        profile = ProfileRepository(session).get(user_id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error resolving profile %s for side effects", user_id)
        return None
    if profile is None:
        logger.warning("Profile %s not found; side effects use a partial identity", user_id)
    return profile


def _identity(profile: Profile | None) -> tuple[str | None, str | None]:
    if profile is None:
        return None, None
    return profile.full_name or None, profile.avatar_url


def notify_project_created(
    session: Session,
    *,
    project: Project,
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> None:
    """Email the client and record ``project_created``."""

    profile = _resolve_subject(session, project.user_id)
    if profile is None:
        return

    user_name = profile.full_name
    if profile.email:
        side_effects.submit(
            "email.project_created",
            send_project_created_email,
            profile.email,
            user_name,
            project.title,
            project.description,
            project.deadline,
        )
    side_effects.submit(
        "activity.project_created",
        recorder.record_project_created,
        project.user_id,
        project.id,
        project.title,
        user_name,
        profile.avatar_url,
    )


def notify_project_completed(
    session: Session,
    *,
    project: Project,
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> None:
    """Email the client and record ``project_completed``."""

    profile = _resolve_subject(session, project.user_id)
    if profile is None:
        return

    user_name = profile.full_name
    if profile.email:
        side_effects.submit(
            "email.project_completed",
            send_project_completed_email,
            profile.email,
            user_name,
            project.title,
            project.description,
        )
    side_effects.submit(
        "activity.project_completed",
        recorder.record_project_completed,
        project.user_id,
        project.id,
        project.title,
        user_name,
        profile.avatar_url,
    )


def notify_estimate_status(
    session: Session,
    *,
    estimate: Estimate,
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
    send_email: bool = False,
) -> None:
    """Record the activity matching the estimate's new status.

    With ``send_email`` a finalized estimate is also emailed to the client.
    """

    record_by_status = {
        ESTIMATE_STATUS_PENDING: recorder.record_estimate_requested,
        ESTIMATE_STATUS_FINALIZED: recorder.record_estimate_finalized,
        ESTIMATE_STATUS_APPROVED: recorder.record_estimate_approved,
        ESTIMATE_STATUS_REJECTED: recorder.record_estimate_rejected,
    }
    record = record_by_status.get(estimate.status)
    if record is None:
        return

    profile = _resolve_subject(session, estimate.user_id)
    user_name, user_avatar = _identity(profile)

    if send_email and estimate.status == ESTIMATE_STATUS_FINALIZED and profile and profile.email:
        side_effects.submit(
            "email.estimate_created",
            send_estimate_created_email,
            profile.email,
            user_name or "there",
            estimate.title,
            estimate.final_price_cents,
            f"{get_settings().app_url}/estimates",
        )

    side_effects.submit(
        f"activity.estimate_{estimate.status}",
        record,
        estimate.user_id,
        estimate.id,
        estimate.title,
        user_name,
        user_avatar,
    )


def notify_invoice_created(
    session: Session,
    *,
    invoice: Invoice,
    estimate: Estimate,
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> None:
    """Email the invoice and record ``invoice_created``."""

    profile = _resolve_subject(session, invoice.user_id)
    user_name, user_avatar = _identity(profile)

    if profile is not None and profile.email:
        side_effects.submit(
            "email.invoice_created",
            send_invoice_created_email,
            profile.email,
            user_name or "there",
            estimate.title,
            invoice.final_price_cents,
            f"{get_settings().app_url}/invoices",
        )
    side_effects.submit(
        "activity.invoice_created",
        recorder.record_invoice_created,
        invoice.user_id,
        invoice.id,
        estimate.id,
        estimate.title,
        invoice.final_price_cents,
        user_name,
        user_avatar,
    )


def notify_invoice_paid(
    session: Session,
    *,
    invoice: Invoice,
    estimate: Estimate,
    project: Project | None,
    recorder: ActivityRecorder,
    side_effects: SideEffectQueue,
) -> None:
    """Record ``invoice_paid``."""

    profile = _resolve_subject(session, invoice.user_id)
    user_name, user_avatar = _identity(profile)
    side_effects.submit(
        "activity.invoice_paid",
        recorder.record_invoice_paid,
        invoice.user_id,
        invoice.id,
        estimate.id,
        estimate.title,
        invoice.final_price_cents,
        project.id if project is not None else None,
        user_name,
        user_avatar,
    )


__all__ = [
    "notify_project_created",
    "notify_project_completed",
    "notify_estimate_status",
    "notify_invoice_created",
    "notify_invoice_paid",
]

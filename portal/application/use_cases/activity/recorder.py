"""Translate business events into activity feed rows."""

from __future__ import annotations

import logging
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.domain.entities import (
    ACTIVITY_ESTIMATE_APPROVED,
    ACTIVITY_ESTIMATE_FINALIZED,
    ACTIVITY_ESTIMATE_REQUESTED,
    ACTIVITY_INVOICE_CREATED,
    ACTIVITY_INVOICE_PAID,
    ACTIVITY_PROJECT_COMPLETED,
    ACTIVITY_PROJECT_CREATED,
    ActivityEvent,
)
from portal.infrastructure.repositories import ActivityRepository

logger = logging.getLogger(__name__)

TEMPLATE_ESTIMATE_REJECTED = "estimate_rejected"

# Wording is owned here; callers never supply their own description.
DESCRIPTION_TEMPLATES: dict[str, str] = {
    ACTIVITY_PROJECT_CREATED: 'New project "{title}" has been created',
    ACTIVITY_PROJECT_COMPLETED: 'Project "{title}" has been completed! 🎉',
    ACTIVITY_ESTIMATE_REQUESTED: 'Requested estimate for "{title}"',
    ACTIVITY_ESTIMATE_FINALIZED: 'Finalized estimate "{title}"',
    ACTIVITY_ESTIMATE_APPROVED: 'Approved estimate "{title}"',
    TEMPLATE_ESTIMATE_REJECTED: 'Rejected estimate "{title}"',
    ACTIVITY_INVOICE_CREATED: 'Received an invoice for "{title}"',
    ACTIVITY_INVOICE_PAID: 'Paid invoice for "{title}"',
}


def describe_activity(template_key: str, title: str) -> str:
    """Return the fixed description for ``template_key``."""

    return DESCRIPTION_TEMPLATES[template_key].format(title=title)


class ActivityRecorder:
    """Append activity rows through the service-role session factory.

    Every ``record_*`` method returns ``True`` when the row was inserted and
    ``False`` on any store error. Errors are logged, never raised.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def record_project_created(
        self,
        user_id: str,
        project_id: Any,
        project_title: str,
        user_name: str,
        user_avatar: str | None = None,
    ) -> bool:
        return self._record(
            user_id=user_id,
            activity_type=ACTIVITY_PROJECT_CREATED,
            template_key=ACTIVITY_PROJECT_CREATED,
            title=project_title,
            metadata={
                "project_id": project_id,
                "project_title": project_title,
                "user_name": user_name,
                "user_avatar": user_avatar,
            },
        )

    def record_project_completed(
        self,
        user_id: str,
        project_id: Any,
        project_title: str,
        user_name: str,
        user_avatar: str | None = None,
    ) -> bool:
        return self._record(
            user_id=user_id,
            activity_type=ACTIVITY_PROJECT_COMPLETED,
            template_key=ACTIVITY_PROJECT_COMPLETED,
            title=project_title,
            metadata={
                "project_id": project_id,
                "project_title": project_title,
                "user_name": user_name,
                "user_avatar": user_avatar,
            },
        )

    def record_estimate_requested(
        self,
        user_id: str,
        estimate_id: Any,
        estimate_title: str,
        user_name: str | None = None,
        user_avatar: str | None = None,
    ) -> bool:
        return self._record_estimate(
            ACTIVITY_ESTIMATE_REQUESTED,
            ACTIVITY_ESTIMATE_REQUESTED,
            user_id,
            estimate_id,
            estimate_title,
            user_name,
            user_avatar,
        )

    def record_estimate_finalized(
        self,
        user_id: str,
        estimate_id: Any,
        estimate_title: str,
        user_name: str | None = None,
        user_avatar: str | None = None,
    ) -> bool:
        return self._record_estimate(
            ACTIVITY_ESTIMATE_FINALIZED,
            ACTIVITY_ESTIMATE_FINALIZED,
            user_id,
            estimate_id,
            estimate_title,
            user_name,
            user_avatar,
        )

    def record_estimate_approved(
        self,
        user_id: str,
        estimate_id: Any,
        estimate_title: str,
        user_name: str | None = None,
        user_avatar: str | None = None,
    ) -> bool:
        return self._record_estimate(
            ACTIVITY_ESTIMATE_APPROVED,
            ACTIVITY_ESTIMATE_APPROVED,
            user_id,
            estimate_id,
            estimate_title,
            user_name,
            user_avatar,
            decision="approved",
        )

    def record_estimate_rejected(
        self,
        user_id: str,
        estimate_id: Any,
        estimate_title: str,
        user_name: str | None = None,
        user_avatar: str | None = None,
    ) -> bool:
        """Record a rejection.

        The activity type enumeration has no rejection value, so the row is
        stored as ``estimate_approved`` with ``metadata.decision == "rejected"``.
        """

        return self._record_estimate(
            ACTIVITY_ESTIMATE_APPROVED,
            TEMPLATE_ESTIMATE_REJECTED,
            user_id,
            estimate_id,
            estimate_title,
            user_name,
            user_avatar,
            decision="rejected",
        )

    def record_invoice_created(
        self,
        user_id: str,
        invoice_id: Any,
        estimate_id: Any,
        project_title: str,
        amount_cents: int,
        user_name: str | None = None,
        user_avatar: str | None = None,
    ) -> bool:
        return self._record(
            user_id=user_id,
            activity_type=ACTIVITY_INVOICE_CREATED,
            template_key=ACTIVITY_INVOICE_CREATED,
            title=project_title,
            metadata={
                "invoice_id": invoice_id,
                "estimate_id": estimate_id,
                "project_title": project_title,
                "amount": amount_cents,
                "user_name": user_name,
                "user_avatar": user_avatar,
            },
        )

    def record_invoice_paid(
        self,
        user_id: str,
        invoice_id: Any,
        estimate_id: Any,
        project_title: str,
        amount_cents: int,
        project_id: Any = None,
        user_name: str | None = None,
        user_avatar: str | None = None,
    ) -> bool:
        return self._record(
            user_id=user_id,
            activity_type=ACTIVITY_INVOICE_PAID,
            template_key=ACTIVITY_INVOICE_PAID,
            title=project_title,
            metadata={
                "invoice_id": invoice_id,
                "estimate_id": estimate_id,
                "project_id": project_id,
                "project_title": project_title,
                "amount": amount_cents,
                "user_name": user_name,
                "user_avatar": user_avatar,
            },
        )

    def _record_estimate(
        self,
        activity_type: str,
        template_key: str,
        user_id: str,
        estimate_id: Any,
        estimate_title: str,
        user_name: str | None,
        user_avatar: str | None,
        *,
        decision: str | None = None,
    ) -> bool:
        return self._record(
            user_id=user_id,
            activity_type=activity_type,
            template_key=template_key,
            title=estimate_title,
            metadata={
                "estimate_id": estimate_id,
                "estimate_title": estimate_title,
                "decision": decision,
                "user_name": user_name,
                "user_avatar": user_avatar,
            },
        )

    def _record(
        self,
        *,
        user_id: str,
        activity_type: str,
        template_key: str,
        title: str,
        metadata: dict[str, Any],
    ) -> bool:
        event = ActivityEvent(
            id=None,
            user_id=user_id,
            activity_type=activity_type,
            activity_description=describe_activity(template_key, title),
            metadata={key: value for key, value in metadata.items() if value is not None},
        )

        try:
            session = self._session_factory()
        except SQLAlchemyError:
            logger.exception("Error opening a session to record %s activity", template_key)
            return False

        try:
            ActivityRepository(session).create(event)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Error recording %s activity for user %s", template_key, user_id)
            return False
        finally:
            session.close()

        logger.info("Activity recorded: %s - %s", template_key, title)
        return True


__all__ = ["ActivityRecorder", "DESCRIPTION_TEMPLATES", "describe_activity"]

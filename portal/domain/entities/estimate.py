"""Domain entity representing a price estimate and its status workflow."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from portal.domain.errors import EstimateTransitionError

ESTIMATE_STATUS_DRAFT = "draft"
ESTIMATE_STATUS_PENDING = "pending"
ESTIMATE_STATUS_FINALIZED = "finalized"
ESTIMATE_STATUS_APPROVED = "approved"
ESTIMATE_STATUS_REJECTED = "rejected"

ESTIMATE_STATUSES = (
    ESTIMATE_STATUS_DRAFT,
    ESTIMATE_STATUS_PENDING,
    ESTIMATE_STATUS_FINALIZED,
    ESTIMATE_STATUS_APPROVED,
    ESTIMATE_STATUS_REJECTED,
)


@dataclass
class Estimate:
    """Quote prepared for a client before work starts."""

    id: int | None
    user_id: str
    title: str
    description: str | None
    status: str
    price_min_cents: int | None = None
    price_max_cents: int | None = None
    final_price_cents: int | None = None
    tax_rate: float = 0.0
    timeline: str | None = None
    finalized_at: datetime | None = None
    approved_by_user: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True)
class TransitionGuard:
    """Condition that must hold for a transition, with the message shown otherwise."""

    check: Callable[[Estimate], bool]
    message: str


_NOT_APPROVED = TransitionGuard(
    check=lambda estimate: not estimate.approved_by_user,
    message="Estimate has already been approved",
)
_HAS_FINAL_PRICE = TransitionGuard(
    check=lambda estimate: bool(estimate.final_price_cents),
    message="Estimate must have a final price",
)

# from-state -> {to-state: guards}
ESTIMATE_TRANSITIONS: dict[str, dict[str, tuple[TransitionGuard, ...]]] = {
    ESTIMATE_STATUS_DRAFT: {
        ESTIMATE_STATUS_PENDING: (),
        ESTIMATE_STATUS_FINALIZED: (_HAS_FINAL_PRICE,),
    },
    ESTIMATE_STATUS_PENDING: {
        ESTIMATE_STATUS_FINALIZED: (_HAS_FINAL_PRICE,),
    },
    ESTIMATE_STATUS_FINALIZED: {
        ESTIMATE_STATUS_APPROVED: (_NOT_APPROVED, _HAS_FINAL_PRICE),
        ESTIMATE_STATUS_REJECTED: (_NOT_APPROVED,),
    },
    ESTIMATE_STATUS_APPROVED: {},
    ESTIMATE_STATUS_REJECTED: {},
}


def allowed_transitions(status: str) -> tuple[str, ...]:
    """Return the statuses reachable from ``status``."""

    return tuple(ESTIMATE_TRANSITIONS.get(status, {}))


def check_transition(estimate: Estimate, target: str) -> bool:
    """Validate moving ``estimate`` to ``target``.

    Returns ``False`` when the estimate is already in ``target`` (nothing to
    do) and ``True`` when the transition is allowed. Raises
    :class:`EstimateTransitionError` otherwise.
    """

    if target not in ESTIMATE_STATUSES:
        raise EstimateTransitionError(f"Unknown estimate status '{target}'")
    if estimate.status == target:
        return False

    guards = ESTIMATE_TRANSITIONS.get(estimate.status, {}).get(target)
    if guards is None:
        raise EstimateTransitionError(
            f"Cannot move estimate from '{estimate.status}' to '{target}'"
        )
    for guard in guards:
        if not guard.check(estimate):
            raise EstimateTransitionError(guard.message)
    return True


__all__ = [
    "Estimate",
    "ESTIMATE_STATUS_DRAFT",
    "ESTIMATE_STATUS_PENDING",
    "ESTIMATE_STATUS_FINALIZED",
    "ESTIMATE_STATUS_APPROVED",
    "ESTIMATE_STATUS_REJECTED",
    "ESTIMATE_STATUSES",
    "ESTIMATE_TRANSITIONS",
    "TransitionGuard",
    "allowed_transitions",
    "check_transition",
]

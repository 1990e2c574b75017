"""Tests for the estimate transition table."""

from __future__ import annotations

import pytest

from portal.domain.entities import Estimate, allowed_transitions, check_transition
from portal.domain.errors import EstimateTransitionError


def _estimate(status: str, **overrides) -> Estimate:
    values = dict(
        id=1,
        user_id="user_1",
        title="Shop",
        description=None,
        status=status,
        final_price_cents=100_00,
    )
    values.update(overrides)
    return Estimate(**values)


@pytest.mark.parametrize(
    ("source", "target"),
    [
        ("draft", "pending"),
        ("draft", "finalized"),
        ("pending", "finalized"),
        ("finalized", "approved"),
        ("finalized", "rejected"),
    ],
)
def test_allowed_transitions(source: str, target: str) -> None:
    assert check_transition(_estimate(source), target) is True


@pytest.mark.parametrize(
    ("source", "target"),
    [
        ("pending", "approved"),
        ("draft", "approved"),
        ("approved", "rejected"),
        ("rejected", "finalized"),
        ("approved", "pending"),
    ],
)
def test_illegal_transitions_raise(source: str, target: str) -> None:
    with pytest.raises(EstimateTransitionError):
        check_transition(_estimate(source), target)


def test_same_state_is_a_no_op() -> None:
    assert check_transition(_estimate("pending"), "pending") is False


def test_finalizing_requires_final_price() -> None:
    with pytest.raises(EstimateTransitionError, match="final price"):
        check_transition(_estimate("pending", final_price_cents=None), "finalized")


def test_already_approved_estimate_cannot_be_rejected() -> None:
    with pytest.raises(EstimateTransitionError, match="already been approved"):
        check_transition(_estimate("finalized", approved_by_user=True), "rejected")


def test_unknown_status_is_rejected() -> None:
    with pytest.raises(EstimateTransitionError, match="Unknown"):
        check_transition(_estimate("draft"), "archived")


def test_terminal_states_have_no_exits() -> None:
    assert allowed_transitions("approved") == ()
    assert allowed_transitions("rejected") == ()
    assert set(allowed_transitions("finalized")) == {"approved", "rejected"}

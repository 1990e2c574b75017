"""Tests for the activity recorder."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from portal.application.use_cases.activity import ActivityRecorder, describe_activity
from portal.domain.entities import ActivityEvent
from portal.infrastructure.database import Base, SessionLocal, engine
from portal.infrastructure.models import ActivityModel
from portal.infrastructure.repositories import ActivityRepository


def _all_rows() -> list[ActivityModel]:
    with SessionLocal() as db:
        return db.query(ActivityModel).order_by(ActivityModel.created_at).all()


def test_record_project_created_stores_template_and_metadata(recorder: ActivityRecorder) -> None:
    assert recorder.record_project_created(
        "user_1", "p1", "Acme Site", "Jane Doe", "https://img/jane.png"
    ) is True

    rows = _all_rows()
    assert len(rows) == 1
    row = rows[0]
    assert row.user_id == "user_1"
    assert row.activity_type == "project_created"
    assert row.activity_description == 'New project "Acme Site" has been created'
    assert row.metadata_ == {
        "project_id": "p1",
        "project_title": "Acme Site",
        "user_name": "Jane Doe",
        "user_avatar": "https://img/jane.png",
    }
    assert row.id
    assert row.created_at is not None


def test_record_project_completed_omits_missing_avatar(recorder: ActivityRecorder) -> None:
    assert recorder.record_project_completed("user_1", 7, "Acme Site", "Jane Doe") is True

    row = _all_rows()[0]
    assert row.activity_type == "project_completed"
    assert row.activity_description == 'Project "Acme Site" has been completed! 🎉'
    assert "user_avatar" not in row.metadata_
    assert row.metadata_["project_id"] == 7


def test_identical_calls_are_not_deduplicated(recorder: ActivityRecorder) -> None:
    for _ in range(2):
        assert recorder.record_project_created("user_1", "p1", "Acme Site", "Jane Doe")

    rows = _all_rows()
    assert len(rows) == 2
    assert rows[0].id != rows[1].id


def test_estimate_rejection_is_stored_under_closed_enumeration(recorder: ActivityRecorder) -> None:
    assert recorder.record_estimate_rejected("user_1", 3, "Logo refresh") is True

    row = _all_rows()[0]
    assert row.activity_type == "estimate_approved"
    assert row.activity_description == 'Rejected estimate "Logo refresh"'
    assert row.metadata_["decision"] == "rejected"


@pytest.mark.parametrize(
    ("method", "args", "activity_type", "description"),
    [
        ("record_estimate_requested", ("u", 1, "Shop"), "estimate_requested", 'Requested estimate for "Shop"'),
        ("record_estimate_finalized", ("u", 1, "Shop"), "estimate_finalized", 'Finalized estimate "Shop"'),
        ("record_estimate_approved", ("u", 1, "Shop"), "estimate_approved", 'Approved estimate "Shop"'),
        ("record_invoice_created", ("u", 9, 1, "Shop", 10850), "invoice_created", 'Received an invoice for "Shop"'),
        ("record_invoice_paid", ("u", 9, 1, "Shop", 10850), "invoice_paid", 'Paid invoice for "Shop"'),
    ],
)
def test_each_method_uses_its_fixed_template(
    recorder: ActivityRecorder,
    method: str,
    args: tuple,
    activity_type: str,
    description: str,
) -> None:
    assert getattr(recorder, method)(*args) is True

    row = _all_rows()[0]
    assert row.activity_type == activity_type
    assert row.activity_description == description


def test_store_failure_returns_false(recorder: ActivityRecorder, caplog) -> None:
    Base.metadata.tables["recent_activity"].drop(bind=engine)

    with caplog.at_level("ERROR"):
        result = recorder.record_project_created("user_1", "p1", "Acme Site", "Jane Doe")

    assert result is False
    assert "project_created" in caplog.text


def test_store_rejects_types_outside_the_enumeration(session) -> None:
    event = ActivityEvent(
        id=None,
        user_id="user_1",
        activity_type="estimate_rejected",
        activity_description="not allowed",
    )

    with pytest.raises(IntegrityError):
        ActivityRepository(session).create(event)


def test_describe_activity_formats_title() -> None:
    assert describe_activity("invoice_paid", "Acme") == 'Paid invoice for "Acme"'

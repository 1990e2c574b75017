"""End-to-end tests for the project, estimate and invoice endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from portal.application.use_cases.notifications import events as notification_events


@pytest.fixture(autouse=True)
def no_email(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    sent: list[str] = []
    for name in (
        "send_project_created_email",
        "send_project_completed_email",
        "send_estimate_created_email",
        "send_invoice_created_email",
    ):
        monkeypatch.setattr(
            notification_events, name, lambda *args, _name=name: sent.append(_name) or True
        )
    return sent


def _feed_types(client: TestClient, auth_headers, profile_id: str) -> list[str]:
    items = client.get("/activity/feed", headers=auth_headers(profile_id)).json()
    return [item["activity_type"] for item in items]


def test_project_lifecycle(client: TestClient, auth_headers, drain, make_profile, no_email) -> None:
    make_profile("admin_1", is_admin=True)
    make_profile("client_1", email="jane@example.com")
    admin = auth_headers("admin_1")

    created = client.post(
        "/projects", json={"user_id": "client_1", "title": "Acme Site"}, headers=admin
    )
    assert created.status_code == 201
    project_id = created.json()["id"]

    completed = client.patch(
        f"/projects/{project_id}", json={"status": "completed"}, headers=admin
    )
    assert completed.status_code == 200
    assert completed.json()["status"] == "completed"

    drain()
    assert _feed_types(client, auth_headers, "client_1") == ["project_completed", "project_created"]
    assert no_email == ["send_project_created_email", "send_project_completed_email"]

    status = client.get("/admin/side-effects", headers=admin).json()
    assert status["running"] is True
    assert status["failed"] == 0
    assert status["succeeded"] == 4


def test_project_endpoints_require_admin(client: TestClient, auth_headers, make_profile) -> None:
    make_profile("client_1")

    response = client.post(
        "/projects", json={"user_id": "client_1", "title": "Acme"}, headers=auth_headers("client_1")
    )

    assert response.status_code == 403


def test_project_update_errors(client: TestClient, auth_headers, make_profile) -> None:
    make_profile("admin_1", is_admin=True)
    admin = auth_headers("admin_1")

    assert client.patch("/projects/42", json={"title": "x"}, headers=admin).status_code == 404
    assert client.patch("/projects/42", json={}, headers=admin).status_code == 400
    assert client.patch("/projects/42", json={"owner": "x"}, headers=admin).status_code == 422


def test_estimate_approval_flow(client: TestClient, auth_headers, drain, make_profile, no_email) -> None:
    make_profile("admin_1", is_admin=True)
    make_profile("client_1", email="jane@example.com")
    client_headers = auth_headers("client_1")

    requested = client.post(
        "/estimates",
        json={"title": "Online shop", "price_min_cents": 1000, "price_max_cents": 9000},
        headers=client_headers,
    )
    assert requested.status_code == 201
    estimate_id = requested.json()["id"]
    assert requested.json()["status"] == "pending"

    premature = client.post(f"/estimates/{estimate_id}/approve", headers=client_headers)
    assert premature.status_code == 400

    finalized = client.put(
        f"/estimates/{estimate_id}",
        json={"status": "finalized", "final_price_cents": 100_000},
        headers=auth_headers("admin_1"),
    )
    assert finalized.status_code == 200
    assert finalized.json()["status"] == "finalized"

    forbidden = client.post(
        f"/estimates/{estimate_id}/approve", headers=auth_headers("admin_1")
    )
    assert forbidden.status_code == 403

    approved = client.post(f"/estimates/{estimate_id}/approve", headers=client_headers)
    assert approved.status_code == 200
    body = approved.json()
    assert body["estimate"]["status"] == "approved"
    assert body["invoice"]["final_price_cents"] == 108_500

    drain()
    assert _feed_types(client, auth_headers, "client_1") == [
        "invoice_created",
        "estimate_approved",
        "estimate_finalized",
        "estimate_requested",
    ]
    assert "send_invoice_created_email" in no_email

    paid = client.post(
        f"/invoices/{body['invoice']['id']}/mark-paid", headers=auth_headers("admin_1")
    )
    assert paid.status_code == 200
    assert paid.json()["invoice"]["status"] == "paid"
    assert paid.json()["project_id"] is not None

    drain()
    assert _feed_types(client, auth_headers, "client_1")[:2] == ["project_created", "invoice_paid"]


def test_estimate_rejection(client: TestClient, auth_headers, drain, make_profile) -> None:
    make_profile("admin_1", is_admin=True)
    make_profile("client_1")

    created = client.post(
        "/estimates",
        json={"title": "Logo", "user_id": "client_1", "final_price_cents": 50_000},
        headers=auth_headers("admin_1"),
    )
    assert created.status_code == 201
    assert created.json()["status"] == "finalized"
    estimate_id = created.json()["id"]

    rejected = client.post(f"/estimates/{estimate_id}/reject", headers=auth_headers("client_1"))
    assert rejected.status_code == 200
    assert rejected.json()["status"] == "rejected"

    again = client.post(f"/estimates/{estimate_id}/reject", headers=auth_headers("client_1"))
    assert again.status_code == 400

    drain()
    [latest, _] = client.get("/activity/feed", headers=auth_headers("client_1")).json()
    assert latest["activity_type"] == "estimate_approved"
    assert latest["metadata"]["decision"] == "rejected"
    assert latest["activity_description"] == 'Rejected estimate "Logo"'


def test_missing_estimate_is_404(client: TestClient, auth_headers, make_profile) -> None:
    make_profile("client_1")

    response = client.post("/estimates/999/approve", headers=auth_headers("client_1"))

    assert response.status_code == 404


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}

"""Tests for the activity feed endpoints."""

from __future__ import annotations

from datetime import timedelta

from fastapi.testclient import TestClient

from portal.infrastructure.security import create_access_token


def test_feed_requires_authentication(client: TestClient) -> None:
    assert client.get("/activity/feed").status_code == 401


def test_feed_rejects_expired_token(client: TestClient, auth_headers, make_profile) -> None:
    make_profile("client_1")
    token = create_access_token("client_1", expires_delta=timedelta(minutes=-1))

    response = client.get("/activity/feed", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_feed_returns_enriched_items(client: TestClient, auth_headers, make_profile, recorder) -> None:
    make_profile("client_1", first_name="Jane", last_name="Doe", organization="Acme Corp")
    recorder.record_project_created("client_1", "p1", "Acme Site", "Jane Doe")

    response = client.get("/activity/feed", headers=auth_headers("client_1"))

    assert response.status_code == 200
    [item] = response.json()
    assert item["activity_type"] == "project_created"
    assert item["activity_description"] == 'New project "Acme Site" has been created'
    assert item["metadata"]["project_title"] == "Acme Site"
    assert item["user"] == {
        "id": "client_1",
        "first_name": "Jane",
        "last_name": "Doe",
        "avatar_url": None,
        "organization": "Acme Corp",
    }


def test_feed_is_visible_to_every_authenticated_user(
    client: TestClient, auth_headers, make_profile, recorder
) -> None:
    make_profile("client_1")
    make_profile("client_2", first_name="Other")
    recorder.record_project_created("client_1", "p1", "Acme Site", "Jane Doe")

    response = client.get("/activity/feed", headers=auth_headers("client_2"))

    assert response.status_code == 200
    assert len(response.json()) == 1


def test_feed_pagination_parameters(client: TestClient, auth_headers, make_profile, recorder) -> None:
    make_profile("client_1")
    for index in range(5):
        recorder.record_project_created("client_1", index, f"P{index}", "Jane Doe")
    headers = auth_headers("client_1")

    first = client.get("/activity/feed", params={"limit": 2}, headers=headers).json()
    second = client.get("/activity/feed", params={"limit": 2, "offset": 2}, headers=headers).json()

    assert len(first) == len(second) == 2
    assert not {item["id"] for item in first} & {item["id"] for item in second}
    assert client.get("/activity/feed", params={"limit": 0}, headers=headers).status_code == 422
    assert client.get("/activity/feed", params={"limit": 101}, headers=headers).status_code == 422
    assert client.get("/activity/feed", params={"offset": -1}, headers=headers).status_code == 422


def test_stats_endpoint(client: TestClient, auth_headers, make_profile, recorder) -> None:
    make_profile("client_1")
    recorder.record_project_created("client_1", "p1", "Acme", "Jane Doe")
    recorder.record_project_completed("client_1", "p1", "Acme", "Jane Doe")

    response = client.get("/activity/stats", headers=auth_headers("client_1"))

    assert response.status_code == 200
    assert response.json() == {
        "total_activities": 2,
        "recent_projects_created": 1,
        "recent_projects_completed": 1,
        "active_users": 1,
    }


def test_admin_records_manual_activity(client: TestClient, auth_headers, make_profile) -> None:
    make_profile("admin_1", first_name=None, last_name=None, avatar_url="https://img/a.png")

    response = client.post(
        "/admin/activity",
        json={"activity_type": "project_completed", "project_id": 5, "project_title": "Acme"},
        headers=auth_headers("admin_1", admin=True),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Activity recorded: project_completed"
    assert body["user_name"] == "Admin User"

    [item] = client.get("/activity/feed", headers=auth_headers("admin_1")).json()
    assert item["user_id"] == "admin_1"
    assert item["metadata"]["user_avatar"] == "https://img/a.png"


def test_manual_activity_rejects_other_types(client: TestClient, auth_headers, make_profile) -> None:
    make_profile("admin_1", is_admin=True)

    response = client.post(
        "/admin/activity",
        json={"activity_type": "invoice_paid", "project_id": 5, "project_title": "Acme"},
        headers=auth_headers("admin_1"),
    )

    assert response.status_code == 400


def test_manual_activity_requires_admin(client: TestClient, auth_headers, make_profile) -> None:
    make_profile("client_1")

    response = client.post(
        "/admin/activity",
        json={"activity_type": "project_created", "project_id": 5, "project_title": "Acme"},
        headers=auth_headers("client_1"),
    )

    assert response.status_code == 403


def test_manual_activity_store_failure_returns_500(client: TestClient, auth_headers, make_profile) -> None:
    from portal.infrastructure.database import Base, engine

    make_profile("admin_1")
    Base.metadata.tables["recent_activity"].drop(bind=engine)

    response = client.post(
        "/admin/activity",
        json={"activity_type": "project_created", "project_id": 5, "project_title": "Acme"},
        headers=auth_headers("admin_1", admin=True),
    )

    assert response.status_code == 500

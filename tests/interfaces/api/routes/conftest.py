"""Fixtures for exercising the HTTP API."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from main import create_app
from portal.infrastructure.security import ADMIN_ROLE, create_access_token


@pytest.fixture()
def app() -> FastAPI:
    return create_app()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    """Return a test client whose lifespan runs the side effect worker."""

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def drain(app: FastAPI, client: TestClient) -> Callable[[], None]:
    """Wait until every side effect submitted so far has run."""

    def _drain() -> None:
        client.portal.call(app.state.side_effects.join)

    return _drain


@pytest.fixture()
def auth_headers() -> Callable[..., dict[str, str]]:
    def _auth_headers(profile_id: str, *, admin: bool = False) -> dict[str, str]:
        token = create_access_token(profile_id, role=ADMIN_ROLE if admin else None)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers

"""Shared fixtures: a throwaway SQLite database and portal services bound to it."""

from __future__ import annotations

import os
import sys
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "portal_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from portal.config import get_settings  # noqa: E402

get_settings.cache_clear()

from portal.application.use_cases.activity import (  # noqa: E402
    ActivityFeedReader,
    ActivityRecorder,
)
from portal.domain.entities import Profile  # noqa: E402
from portal.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from portal.infrastructure.repositories import ProfileRepository  # noqa: E402
from portal.infrastructure.side_effects import SideEffectQueue  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def recorder() -> ActivityRecorder:
    return ActivityRecorder(SessionLocal)


@pytest.fixture()
def reader() -> ActivityFeedReader:
    return ActivityFeedReader(SessionLocal)


@pytest.fixture()
def side_effects() -> SideEffectQueue:
    """A queue without a worker: side effects run inline."""

    return SideEffectQueue(history_size=50)


@pytest.fixture()
def make_profile() -> Callable[..., Profile]:
    def _make_profile(
        profile_id: str,
        *,
        first_name: str | None = "Jane",
        last_name: str | None = "Doe",
        email: str | None = None,
        avatar_url: str | None = None,
        organization: str | None = None,
        is_admin: bool = False,
    ) -> Profile:
        with SessionLocal() as db:
            return ProfileRepository(db).create(
                Profile(
                    id=profile_id,
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    avatar_url=avatar_url,
                    organization=organization,
                    is_admin=is_admin,
                )
            )

    return _make_profile

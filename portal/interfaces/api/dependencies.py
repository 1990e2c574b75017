"""FastAPI dependency utilities."""

from dataclasses import replace

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from portal.application.use_cases.activity import ActivityFeedReader, ActivityRecorder
from portal.domain.entities import Profile
from portal.infrastructure.database import get_db
from portal.infrastructure.repositories import ProfileRepository
from portal.infrastructure.security import decode_access_token, is_admin_claim
from portal.infrastructure.side_effects import SideEffectQueue

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> Profile:
    """Resolve the profile for ``token``.

    ``is_admin`` on the returned profile is set when either the stored profile
    or the token's role claim grants administrator access.
    """

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise _unauthorized()

    profile = ProfileRepository(db).get(subject)
    if profile is None:
        raise _unauthorized("User not found")

    if is_admin_claim(payload) and not profile.is_admin:
        profile = replace(profile, is_admin=True)
    return profile


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Profile:
    """Return the authenticated profile from the bearer token."""

    if credentials is None:
        raise _unauthorized("Not authenticated")
    return resolve_current_user(credentials.credentials, db)


def require_admin(current_user: Profile = Depends(get_current_user)) -> Profile:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )
    return current_user


def get_activity_recorder(request: Request) -> ActivityRecorder:
    return request.app.state.activity_recorder


def get_feed_reader(request: Request) -> ActivityFeedReader:
    return request.app.state.feed_reader


def get_side_effects(request: Request) -> SideEffectQueue:
    return request.app.state.side_effects

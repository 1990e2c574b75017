"""Token helpers for identities issued by the external auth provider."""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from portal.config import get_settings

ALGORITHM = "HS256"
ADMIN_ROLE = "admin"


def create_access_token(
    subject: str,
    *,
    role: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a token for ``subject``; used by scripts and tests."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims: dict[str, Any] = {"sub": subject, "exp": expire}
    if role:
        claims["role"] = role
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def is_admin_claim(payload: dict[str, Any]) -> bool:
    """Return ``True`` when the token's role claim grants admin access."""

    role = payload.get("role")
    return isinstance(role, str) and role.lower() == ADMIN_ROLE

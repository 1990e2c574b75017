"""Utility script to mirror a profile locally and issue a token for it."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from portal.domain.entities import Profile
from portal.infrastructure.database import SessionLocal, initialize_database
from portal.infrastructure.repositories import ProfileRepository
from portal.infrastructure.security import ADMIN_ROLE, create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for profile creation."""

    parser = argparse.ArgumentParser(
        description="Create a portal profile and print a bearer token for it.",
    )
    parser.add_argument("--id", required=True, help="Profile id from the identity provider")
    parser.add_argument("--first-name", default="Admin", help="First name (default: Admin)")
    parser.add_argument("--last-name", default="User", help="Last name (default: User)")
    parser.add_argument("--email", default=None, help="Email address used for notifications")
    parser.add_argument("--organization", default=None, help="Organization (optional)")
    parser.add_argument(
        "--admin",
        action="store_true",
        help="Mark the profile as administrator and issue an admin token.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a profile using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        profile = ProfileRepository(session).create(
            Profile(
                id=args.id,
                first_name=args.first_name,
                last_name=args.last_name,
                email=args.email,
                organization=args.organization,
                is_admin=args.admin,
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the profile: {exc}") from exc
    finally:
        session.close()

    token = create_access_token(profile.id, role=ADMIN_ROLE if args.admin else None)
    print(
        "Profile created:\n"
        f"  ID: {profile.id}\n"
        f"  Name: {profile.full_name}\n"
        f"  Admin: {profile.is_admin}\n"
        f"  Token: {token}"
    )


if __name__ == "__main__":
    main()

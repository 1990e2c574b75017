"""Persistence layer for profile data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from portal.domain.entities import Profile
from portal.infrastructure.models import ProfileModel


class ProfileRepository:
    """Read profiles mirrored from the identity provider."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, profile_id: str) -> Profile | None:
        model = self.session.get(ProfileModel, profile_id)
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, profile_ids: Sequence[str]) -> dict[str, Profile]:
        if not profile_ids:
            return {}

        unique_ids = {str(profile_id) for profile_id in profile_ids}
        query = self.session.query(ProfileModel).filter(ProfileModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def create(self, profile: Profile) -> Profile:
        model = ProfileModel(
            id=profile.id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            avatar_url=profile.avatar_url,
            organization=profile.organization,
            is_admin=profile.is_admin,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ProfileModel) -> Profile:
        return Profile(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            avatar_url=model.avatar_url,
            organization=model.organization,
            is_admin=bool(model.is_admin),
            created_at=model.created_at,
        )


__all__ = ["ProfileRepository"]

"""Persistence layer for projects."""

from __future__ import annotations

from sqlalchemy.orm import Session

from portal.domain.entities import Project
from portal.infrastructure.models import ProjectModel
from portal.utils import ensure_app_timezone


class ProjectRepository:
    """Provide CRUD operations for :class:`Project` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, project_id: int) -> Project | None:
        model = self.session.get(ProjectModel, project_id)
        return self._to_entity(model) if model else None

    def create(self, project: Project) -> Project:
        model = ProjectModel()
        self._apply_entity_to_model(model, project)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, project: Project) -> Project:
        model = self.session.get(ProjectModel, project.id)
        if model is None:
            msg = f"Project with id {project.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, project)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: ProjectModel, project: Project) -> None:
        model.user_id = project.user_id
        model.title = project.title
        model.description = project.description
        model.status = project.status
        model.deadline = project.deadline
        model.live_preview_url = project.live_preview_url
        model.repo_url = project.repo_url

    @staticmethod
    def _to_entity(model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            status=model.status,
            deadline=model.deadline,
            live_preview_url=model.live_preview_url,
            repo_url=model.repo_url,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["ProjectRepository"]

"""Persistence layer for estimates."""

from __future__ import annotations

from sqlalchemy.orm import Session

from portal.domain.entities import Estimate
from portal.infrastructure.models import EstimateModel
from portal.utils import ensure_app_naive_datetime, ensure_app_timezone


class EstimateRepository:
    """Provide CRUD operations for :class:`Estimate` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, estimate_id: int) -> Estimate | None:
        model = self.session.get(EstimateModel, estimate_id)
        return self._to_entity(model) if model else None

    def create(self, estimate: Estimate) -> Estimate:
        model = EstimateModel()
        self._apply_entity_to_model(model, estimate)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, estimate: Estimate) -> Estimate:
        model = self.session.get(EstimateModel, estimate.id)
        if model is None:
            msg = f"Estimate with id {estimate.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, estimate)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: EstimateModel, estimate: Estimate) -> None:
        model.user_id = estimate.user_id
        model.title = estimate.title
        model.description = estimate.description
        model.price_min_cents = estimate.price_min_cents
        model.price_max_cents = estimate.price_max_cents
        model.final_price_cents = estimate.final_price_cents
        model.tax_rate = estimate.tax_rate or 0.0
        model.timeline = estimate.timeline
        model.status = estimate.status
        model.finalized_at = ensure_app_naive_datetime(estimate.finalized_at)
        model.approved_by_user = bool(estimate.approved_by_user)

    @staticmethod
    def _to_entity(model: EstimateModel) -> Estimate:
        return Estimate(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            status=model.status,
            price_min_cents=model.price_min_cents,
            price_max_cents=model.price_max_cents,
            final_price_cents=model.final_price_cents,
            tax_rate=model.tax_rate or 0.0,
            timeline=model.timeline,
            finalized_at=ensure_app_timezone(model.finalized_at),
            approved_by_user=bool(model.approved_by_user),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["EstimateRepository"]

"""Persistence layer for invoices."""

from __future__ import annotations

from sqlalchemy.orm import Session

from portal.domain.entities import Invoice
from portal.infrastructure.models import InvoiceModel
from portal.utils import ensure_app_naive_datetime, ensure_app_timezone


class InvoiceRepository:
    """Provide CRUD operations for :class:`Invoice` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, invoice_id: int) -> Invoice | None:
        model = self.session.get(InvoiceModel, invoice_id)
        return self._to_entity(model) if model else None

    def create(self, invoice: Invoice) -> Invoice:
        model = InvoiceModel()
        self._apply_entity_to_model(model, invoice)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, invoice: Invoice) -> Invoice:
        model = self.session.get(InvoiceModel, invoice.id)
        if model is None:
            msg = f"Invoice with id {invoice.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, invoice)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: InvoiceModel, invoice: Invoice) -> None:
        model.estimate_id = invoice.estimate_id
        model.user_id = invoice.user_id
        model.final_price_cents = invoice.final_price_cents
        model.tax_rate = invoice.tax_rate
        model.status = invoice.status
        model.due_date = ensure_app_naive_datetime(invoice.due_date)
        model.paid_at = ensure_app_naive_datetime(invoice.paid_at)

    @staticmethod
    def _to_entity(model: InvoiceModel) -> Invoice:
        return Invoice(
            id=model.id,
            estimate_id=model.estimate_id,
            user_id=model.user_id,
            final_price_cents=model.final_price_cents,
            tax_rate=model.tax_rate,
            status=model.status,
            due_date=ensure_app_timezone(model.due_date),
            paid_at=ensure_app_timezone(model.paid_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["InvoiceRepository"]

"""Schemas for invoice endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class InvoiceRead(BaseModel):
    id: int
    estimate_id: int
    user_id: str
    final_price_cents: int
    tax_rate: float
    status: str
    due_date: datetime | None
    paid_at: datetime | None
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class InvoicePaidRead(BaseModel):
    invoice: InvoiceRead
    project_id: int | None = None


__all__ = ["InvoicePaidRead", "InvoiceRead"]

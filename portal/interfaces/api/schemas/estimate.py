"""Schemas for estimate endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .invoice import InvoiceRead


class EstimateCreate(BaseModel):
    """Estimate request from a client, or a finalized estimate from an admin.

    Administrators set ``user_id`` and ``final_price_cents`` to prepare an
    estimate for a client.
    """

    title: str = Field(..., min_length=1)
    description: str | None = None
    timeline: str | None = None
    price_min_cents: int | None = Field(None, ge=0)
    price_max_cents: int | None = Field(None, ge=0)
    final_price_cents: int | None = Field(None, ge=0)
    tax_rate: float | None = Field(None, ge=0)
    status: str | None = None
    user_id: str | None = None


class EstimateUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    timeline: str | None = None
    price_min_cents: int | None = Field(None, ge=0)
    price_max_cents: int | None = Field(None, ge=0)
    final_price_cents: int | None = Field(None, ge=0)
    tax_rate: float | None = Field(None, ge=0)
    status: str | None = None

    model_config = ConfigDict(extra="forbid")


class EstimateRead(BaseModel):
    id: int
    user_id: str
    title: str
    description: str | None
    status: str
    price_min_cents: int | None
    price_max_cents: int | None
    final_price_cents: int | None
    tax_rate: float
    timeline: str | None
    finalized_at: datetime | None
    approved_by_user: bool
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class EstimateApprovalRead(BaseModel):
    success: bool = True
    message: str
    estimate: EstimateRead
    invoice: InvoiceRead


__all__ = ["EstimateApprovalRead", "EstimateCreate", "EstimateRead", "EstimateUpdate"]

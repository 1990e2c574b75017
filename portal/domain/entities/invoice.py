"""Domain entity representing an invoice issued for an approved estimate."""

from dataclasses import dataclass
from datetime import datetime

INVOICE_STATUS_PENDING = "pending"
INVOICE_STATUS_PAID = "paid"


@dataclass
class Invoice:
    """Amount owed by a client, including tax."""

    id: int | None
    estimate_id: int
    user_id: str
    final_price_cents: int
    tax_rate: float
    status: str
    due_date: datetime | None
    paid_at: datetime | None = None
    created_at: datetime | None = None


__all__ = ["Invoice", "INVOICE_STATUS_PENDING", "INVOICE_STATUS_PAID"]

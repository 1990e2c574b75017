"""SQLAlchemy model for invoices."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String

from portal.infrastructure.database import Base
from portal.utils import now_in_app_naive_datetime


class InvoiceModel(Base):
    """Database representation of an invoice."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    estimate_id = Column(Integer, ForeignKey("estimates.id"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    final_price_cents = Column(Integer, nullable=False)
    tax_rate = Column(Float, nullable=False, default=0.0)
    status = Column(String(20), nullable=False, default="pending")
    due_date = Column(DateTime, nullable=True)
    paid_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["InvoiceModel"]

"""SQLAlchemy model for estimates."""

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.sql import expression

from portal.infrastructure.database import Base
from portal.utils import now_in_app_naive_datetime


class EstimateModel(Base):
    """Database representation of an estimate."""

    __tablename__ = "estimates"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price_min_cents = Column(Integer, nullable=True)
    price_max_cents = Column(Integer, nullable=True)
    final_price_cents = Column(Integer, nullable=True)
    tax_rate = Column(Float, nullable=False, default=0.0)
    timeline = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="draft")
    finalized_at = Column(DateTime, nullable=True)
    approved_by_user = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["EstimateModel"]

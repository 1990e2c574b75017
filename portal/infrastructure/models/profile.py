"""SQLAlchemy model for the profiles table."""

from sqlalchemy import Boolean, Column, DateTime, String, func
from sqlalchemy.sql import expression

from portal.infrastructure.database import Base


class ProfileModel(Base):
    """Database representation of a portal user profile."""

    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    avatar_url = Column(String(500), nullable=True)
    organization = Column(String(255), nullable=True)
    is_admin = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["ProfileModel"]

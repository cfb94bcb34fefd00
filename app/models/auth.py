"""Auth & user identity models."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from ..database import UTCDateTime
from .base import Base, BigIntId


class UserIdentity(Base):
    __tablename__ = "user_identities"
    id = Column(BigIntId, primary_key=True)
    account_id = Column(String(255), unique=True, nullable=False)  # user_id from identity header
    first_login = Column(Boolean, default=True)
    created_at = Column(UTCDateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        UTCDateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    dashboard_templates = relationship(
        "DashboardTemplate", back_populates="user_identity", cascade="all, delete-orphan"
    )

"""Dashboard template models — per-user grid layouts keyed by category."""

import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Index, String, text
from sqlalchemy.orm import relationship

from ..database import UTCDateTime
from ..services.errors import TemplateValidationError
from .base import Base, BigIntId


class AvailableTemplates(str, enum.Enum):
    """Dashboards that support user templates."""

    LANDING_PAGE = "landingPage"

    @classmethod
    def is_valid(cls, value) -> bool:
        return value in {t.value for t in cls}

    @classmethod
    def validate(cls, value) -> "AvailableTemplates":
        """Return the matching member or raise TemplateValidationError."""
        if not cls.is_valid(value):
            expected = ", ".join(t.value for t in cls)
            raise TemplateValidationError(
                f"invalid dashboard template {value}. Expected one of {expected}"
            )
        return cls(value)


class DashboardTemplate(Base):
    __tablename__ = "dashboard_templates"

    id = Column(BigIntId, primary_key=True)
    user_identity_id = Column(BigIntId, ForeignKey("user_identities.id"), nullable=False)
    default = Column(Boolean, default=False, nullable=False)

    # templateBase on the wire
    dashboard_type = Column(String(50), nullable=False)
    display_name = Column(String(255), nullable=False)

    # {"sm": [...], "md": [...], "lg": [...], "xl": [...]}
    template_config = Column(JSON, nullable=False, default=dict)

    created_at = Column(UTCDateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        UTCDateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user_identity = relationship("UserIdentity", back_populates="dashboard_templates")

    __table_args__ = (
        Index("ix_dashboard_templates_user_type", "user_identity_id", "dashboard_type"),
        # At most one default per user and dashboard
        Index(
            "uq_dashboard_templates_user_default",
            "user_identity_id",
            "dashboard_type",
            unique=True,
            postgresql_where=text('"default"'),
            sqlite_where=text('"default"'),
        ),
    )

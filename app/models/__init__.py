"""Database models — re-exports all models.

Import from here:  from app.models import UserIdentity, DashboardTemplate
Or from submodules: from app.models.dashboard import AvailableTemplates
"""

from .base import Base  # noqa: F401

# Auth & Users
from .auth import UserIdentity  # noqa: F401

# Dashboard Templates
from .dashboard import AvailableTemplates, DashboardTemplate  # noqa: F401

"""
dashboard.py — Pydantic schemas for dashboard templates.

Wire format is camelCase (templateBase, templateConfig, maxH, ...);
attributes stay snake_case. Dump with by_alias=True.

Called by: routers/dashboard_templates.py, services/dashboard_template_service.py
Depends on: pydantic
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ── Layout ──────────────────────────────────────────────────────────


class GridItem(_CamelModel):
    """One widget placement on the react-grid-layout grid."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    i: str
    x: int = 0
    y: int = 0
    w: int = 1
    h: int = 1
    max_h: int | None = Field(None, alias="maxH")
    min_h: int | None = Field(None, alias="minH")
    static: bool = False


class TemplateConfig(_CamelModel):
    """Layout per breakpoint."""

    sm: list[GridItem] = Field(default_factory=list)
    md: list[GridItem] = Field(default_factory=list)
    lg: list[GridItem] = Field(default_factory=list)
    xl: list[GridItem] = Field(default_factory=list)


class TemplateBase(_CamelModel):
    name: str
    display_name: str = Field(alias="displayName")


# ── Responses ───────────────────────────────────────────────────────


class BaseDashboardTemplateOut(_CamelModel):
    """System default for a dashboard; not owned by any user."""

    name: str
    display_name: str = Field(alias="displayName")
    template_config: TemplateConfig = Field(alias="templateConfig")


class DashboardTemplateOut(_CamelModel):
    id: int
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")
    user_identity_id: int = Field(alias="userIdentityId")
    default: bool = False
    template_base: TemplateBase = Field(alias="templateBase")
    template_config: TemplateConfig = Field(alias="templateConfig")

    @classmethod
    def from_model(cls, t) -> "DashboardTemplateOut":
        """Build the wire shape from a models.DashboardTemplate row."""
        return cls(
            id=t.id,
            created_at=t.created_at,
            updated_at=t.updated_at,
            user_identity_id=t.user_identity_id,
            default=bool(t.default),
            template_base=TemplateBase(name=t.dashboard_type, display_name=t.display_name),
            template_config=TemplateConfig.model_validate(t.template_config or {}),
        )


# ── Requests ────────────────────────────────────────────────────────


class TemplateBaseUpdate(_CamelModel):
    """Only the display name is editable; the dashboard name is fixed at creation."""

    display_name: str | None = Field(None, alias="displayName", min_length=1, max_length=255)


class DashboardTemplateUpdate(_CamelModel):
    """PATCH body. Unknown keys are ignored; only layout and display name change."""

    template_base: TemplateBaseUpdate | None = Field(None, alias="templateBase")
    template_config: TemplateConfig | None = Field(None, alias="templateConfig")

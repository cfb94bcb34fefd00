"""Dashboard template service — per-user layouts forked from base templates.

Every user gets their own copy of a dashboard's base template the first
time they ask for it; after that they can edit, copy, delete and pick a
default among their copies. Every write checks ownership first.

Errors are raised, never returned:
    RecordNotFoundError  — template id does not exist
    NotAuthorizedError   — template belongs to another user
    TemplateValidationError — unknown dashboard name

Usage:
    templates = get_dashboard_templates(db, user.id, AvailableTemplates.LANDING_PAGE)
    change_default_template(db, user.id, template_id)
"""

import copy
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import AvailableTemplates, DashboardTemplate
from ..schemas.dashboard import BaseDashboardTemplateOut, DashboardTemplateUpdate
from .base_templates import get_base_template, list_base_templates
from .errors import NotAuthorizedError, RecordNotFoundError

log = logging.getLogger("chrome.dashboard_templates")

# Primary keys are BIGINT (signed 64-bit)
MAX_ROW_ID = 2**63 - 1


# ── Helpers ─────────────────────────────────────────────────────────────


def _get_owned(db: Session, user_id: int, template_id: int) -> DashboardTemplate:
    """Load a template and verify the user owns it."""
    if template_id > MAX_ROW_ID:
        raise RecordNotFoundError()
    template = db.get(DashboardTemplate, template_id)
    if template is None:
        raise RecordNotFoundError()
    if template.user_identity_id != user_id:
        log.warning("User %s tried to access template %s owned by %s",
                    user_id, template_id, template.user_identity_id)
        raise NotAuthorizedError(f"user {user_id} does not own template {template_id}")
    return template


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        log.exception("Dashboard template commit failed")
        raise


def _dashboards_with_templates(db: Session, user_id: int) -> set[str]:
    rows = (
        db.query(DashboardTemplate.dashboard_type)
        .filter(DashboardTemplate.user_identity_id == user_id)
        .distinct()
        .all()
    )
    return {row[0] for row in rows}


def _fork_base_template(db: Session, user_id: int, dashboard: AvailableTemplates) -> DashboardTemplate:
    """Create the user's first template for a dashboard from its base."""
    base = get_base_template(dashboard)
    template = DashboardTemplate(
        user_identity_id=user_id,
        default=True,
        dashboard_type=dashboard.value,
        display_name=base["displayName"],
        template_config=base["templateConfig"],
    )
    db.add(template)
    return template


# ── Reads ───────────────────────────────────────────────────────────────


def get_dashboard_templates(db: Session, user_id: int, dashboard="") -> list[DashboardTemplate]:
    """List a user's templates, optionally for a single dashboard.

    Dashboards the user has never opened get a default template forked
    from the base template before listing.
    """
    in_scope = [AvailableTemplates.validate(dashboard)] if dashboard else list(AvailableTemplates)

    existing = _dashboards_with_templates(db, user_id)
    missing = [d for d in in_scope if d.value not in existing]
    if missing:
        for d in missing:
            _fork_base_template(db, user_id, d)
        try:
            db.commit()
            log.info("Created default %s templates for user %s", [d.value for d in missing], user_id)
        except IntegrityError:
            # A concurrent first request from the same user forked them already
            db.rollback()
            log.info("Default templates for user %s already created concurrently", user_id)

    return (
        db.query(DashboardTemplate)
        .filter(
            DashboardTemplate.user_identity_id == user_id,
            DashboardTemplate.dashboard_type.in_([d.value for d in in_scope]),
        )
        .order_by(DashboardTemplate.id)
        .all()
    )


def get_all_base_templates() -> list[BaseDashboardTemplateOut]:
    return [BaseDashboardTemplateOut.model_validate(t) for t in list_base_templates()]


def get_dashboard_template_base(dashboard) -> BaseDashboardTemplateOut:
    """Return the base template for one dashboard (raises on unknown name)."""
    return BaseDashboardTemplateOut.model_validate(get_base_template(AvailableTemplates.validate(dashboard)))


# ── Writes ──────────────────────────────────────────────────────────────


def update_dashboard_template(
    db: Session, template_id: int, user_id: int, payload: DashboardTemplateUpdate
) -> DashboardTemplate:
    """Apply layout and display name changes to an owned template."""
    template = _get_owned(db, user_id, template_id)

    if payload.template_config is not None:
        # Only breakpoints present in the body are replaced
        merged = dict(template.template_config or {})
        for bp in payload.template_config.model_fields_set:
            items = getattr(payload.template_config, bp)
            merged[bp] = [item.model_dump(by_alias=True) for item in items]
        template.template_config = merged
    if payload.template_base is not None and payload.template_base.display_name:
        template.display_name = payload.template_base.display_name

    _commit(db)
    db.refresh(template)
    return template


def copy_dashboard_template(db: Session, user_id: int, template_id: int) -> DashboardTemplate:
    """Duplicate an owned template. The copy is never the default."""
    source = _get_owned(db, user_id, template_id)
    clone = DashboardTemplate(
        user_identity_id=user_id,
        default=False,
        dashboard_type=source.dashboard_type,
        display_name=source.display_name,
        template_config=copy.deepcopy(source.template_config),
    )
    db.add(clone)
    _commit(db)
    db.refresh(clone)
    log.info("User %s copied template %s to %s", user_id, template_id, clone.id)
    return clone


def delete_template(db: Session, user_id: int, template_id: int) -> None:
    template = _get_owned(db, user_id, template_id)
    db.delete(template)
    _commit(db)
    log.info("User %s deleted template %s", user_id, template_id)


def change_default_template(db: Session, user_id: int, template_id: int) -> DashboardTemplate:
    """Make a template the user's default for its dashboard.

    Clears the flag on the user's other templates of the same dashboard in
    the same transaction, so there is at most one default per dashboard.
    """
    template = _get_owned(db, user_id, template_id)

    db.query(DashboardTemplate).filter(
        DashboardTemplate.user_identity_id == user_id,
        DashboardTemplate.dashboard_type == template.dashboard_type,
        DashboardTemplate.id != template.id,
    ).update({DashboardTemplate.default: False}, synchronize_session="fetch")
    template.default = True

    _commit(db)
    db.refresh(template)
    return template

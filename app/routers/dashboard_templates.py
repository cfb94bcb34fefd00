"""
dashboard_templates.py — Dashboard Template Routes

Per-user dashboard layouts: list, edit, copy, delete, pick a default, and
read the system base templates.

Business Rules:
- Every handler: parse → validate → call service → dispatch response
- Bad template IDs, unknown dashboards and unreadable bodies are rejected
  with 400 before the service is called
- Service errors always go through dashboard_responses (never ad hoc);
  unclassified ones become a logged 400, never a bare 500
- Ownership is enforced in the service layer

Called by: main.py (router mount under {api_prefix}/dashboard-templates)
Depends on: services/dashboard_template_service, routers/dashboard_responses
"""

import re
from typing import Union

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import require_user
from ..models import AvailableTemplates, UserIdentity
from ..schemas.dashboard import BaseDashboardTemplateOut, DashboardTemplateOut, DashboardTemplateUpdate
from ..schemas.errors import ErrorResponse
from ..schemas.responses import EntityResponse, ListResponse
from ..services import dashboard_template_service as service
from ..services.errors import TemplateValidationError
from .dashboard_responses import dashboard_response, error_response

router = APIRouter(
    tags=["dashboard-templates"],
    dependencies=[Depends(require_user)],
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)

MAX_TEMPLATE_ID = 2**64 - 1
_DIGITS = re.compile(r"[0-9]+")


def parse_template_id(raw: str) -> int:
    """Parse an unsigned decimal template ID. Raises TemplateValidationError."""
    if not _DIGITS.fullmatch(raw or ""):
        raise TemplateValidationError("invalid template ID")
    value = int(raw)
    if value > MAX_TEMPLATE_ID:
        raise TemplateValidationError("invalid template ID")
    return value


def _entity(template) -> EntityResponse[DashboardTemplateOut]:
    return EntityResponse[DashboardTemplateOut](data=DashboardTemplateOut.from_model(template))


# ── User Templates ───────────────────────────────────────────────────


@router.get("/", response_model=ListResponse[DashboardTemplateOut])
def get_dashboard_templates(
    dashboard: str = Query(""),
    user: UserIdentity = Depends(require_user),
    db: Session = Depends(get_db),
):
    """List the user's templates; empty `dashboard` means all dashboards."""
    if dashboard:
        try:
            AvailableTemplates.validate(dashboard)
        except TemplateValidationError as e:
            return error_response(e)

    try:
        templates = service.get_dashboard_templates(db, user.id, dashboard)
    except Exception as e:  # classified by the dispatcher
        return error_response(e)

    resp = ListResponse[DashboardTemplateOut](data=[DashboardTemplateOut.from_model(t) for t in templates])
    return dashboard_response(resp)


@router.patch("/{template_id}", response_model=EntityResponse[DashboardTemplateOut])
async def update_dashboard_template(
    template_id: str,
    request: Request,
    user: UserIdentity = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Update layout / display name of an owned template."""
    try:
        tid = parse_template_id(template_id)
    except TemplateValidationError as e:
        return error_response(e)

    try:
        payload = DashboardTemplateUpdate.model_validate(await request.json())
    except (ValueError, UnicodeDecodeError):
        return error_response(TemplateValidationError("unable to parse payload to dashboard template"))

    try:
        updated = service.update_dashboard_template(db, tid, user.id, payload)
    except Exception as e:  # classified by the dispatcher
        return error_response(e)
    return dashboard_response(_entity(updated))


@router.delete("/{template_id}", status_code=204)
def delete_dashboard_template(
    template_id: str,
    user: UserIdentity = Depends(require_user),
    db: Session = Depends(get_db),
):
    try:
        tid = parse_template_id(template_id)
    except TemplateValidationError as e:
        return error_response(e)

    try:
        service.delete_template(db, user.id, tid)
    except Exception as e:  # classified by the dispatcher
        return error_response(e)
    return Response(status_code=204)


@router.post("/{template_id}/copy", response_model=EntityResponse[DashboardTemplateOut])
def copy_dashboard_template(
    template_id: str,
    user: UserIdentity = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Create a new, non-default copy of an owned template."""
    try:
        tid = parse_template_id(template_id)
    except TemplateValidationError as e:
        return error_response(e)

    try:
        clone = service.copy_dashboard_template(db, user.id, tid)
    except Exception as e:  # classified by the dispatcher
        return error_response(e)
    return dashboard_response(_entity(clone))


@router.post("/{template_id}/default", response_model=EntityResponse[DashboardTemplateOut])
def change_default_template(
    template_id: str,
    user: UserIdentity = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Mark a template as the user's default for its dashboard."""
    try:
        tid = parse_template_id(template_id)
    except TemplateValidationError as e:
        return error_response(e)

    try:
        template = service.change_default_template(db, user.id, tid)
    except Exception as e:  # classified by the dispatcher
        return error_response(e)
    return dashboard_response(_entity(template))


# ── Base Templates ───────────────────────────────────────────────────


@router.get(
    "/base-template",
    response_model=Union[ListResponse[BaseDashboardTemplateOut], EntityResponse[BaseDashboardTemplateOut]],
)
def get_base_dashboard_templates(dashboard: str = Query("")):
    """All base templates, or the one for `dashboard` when given."""
    if not dashboard:
        return dashboard_response(ListResponse[BaseDashboardTemplateOut](data=service.get_all_base_templates()))

    try:
        template = service.get_dashboard_template_base(dashboard)
    except Exception as e:  # classified by the dispatcher
        return error_response(e)
    return dashboard_response(EntityResponse[BaseDashboardTemplateOut](data=template))

"""
dependencies.py — Shared FastAPI Dependencies

Authentication for the dashboard template routes. The gateway in front of
the service authenticates the user and forwards a base64 JSON identity
document; we trust it as-is and map it to a local UserIdentity row.

Business Rules:
- require_user raises 401 if the identity header is missing or malformed
- First request from an unknown user creates their UserIdentity (first_login=True)
- Handlers receive the UserIdentity explicitly, never from ambient state

Called by: routers/dashboard_templates.py
Depends on: models, database, config
"""

import base64
import binascii
import json
import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .models import UserIdentity

log = logging.getLogger(__name__)


# ── Identity Header ───────────────────────────────────────────────────


def parse_identity_header(raw: str) -> str:
    """Decode the identity header and return the external user id.

    Expected document: {"identity": {"user": {"user_id": "..."}}}.
    Raises ValueError if the header can't be decoded or has no user id.
    """
    try:
        doc = json.loads(base64.b64decode(raw, validate=True))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"undecodable identity header: {e}") from e
    if not isinstance(doc, dict):
        raise ValueError("identity header is not a JSON object")

    identity = doc.get("identity")
    user = identity.get("user") if isinstance(identity, dict) else None
    user_id = user.get("user_id") if isinstance(user, dict) else None
    if user_id in (None, ""):
        raise ValueError("identity header has no user_id")
    return str(user_id)


def get_or_create_identity(db: Session, account_id: str) -> UserIdentity:
    """Return the UserIdentity for an external id, creating it on first login."""
    identity = db.query(UserIdentity).filter_by(account_id=account_id).first()
    if identity:
        return identity

    identity = UserIdentity(account_id=account_id, first_login=True)
    db.add(identity)
    try:
        db.commit()
    except IntegrityError:
        # Concurrent first request from the same user won the insert
        db.rollback()
        return db.query(UserIdentity).filter_by(account_id=account_id).one()
    db.refresh(identity)
    log.info("Created user identity %s for account %s", identity.id, account_id)
    return identity


# ── Authentication ────────────────────────────────────────────────────


def require_user(request: Request, db: Session = Depends(get_db)) -> UserIdentity:
    """Dependency: raises 401 if the request carries no usable identity."""
    raw = request.headers.get(settings.identity_header)
    if not raw:
        raise HTTPException(401, "Not authenticated")
    try:
        account_id = parse_identity_header(raw)
    except ValueError as e:
        log.warning("Rejected identity header: %s", e)
        raise HTTPException(401, "Not authenticated")
    return get_or_create_identity(db, account_id)

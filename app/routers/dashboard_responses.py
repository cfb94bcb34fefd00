"""
dashboard_responses.py — Response dispatcher for dashboard template routes

Turns a service outcome into exactly one of:
    200 + {"data": ...}       success envelope
    4xx/5xx + {"errors": [...]}  error envelope

classify_error() is a pure function (no Request/Response objects) so the
status mapping can be tested without HTTP.

Business Rules:
- Record not found → 404 with the error message
- Not authorized → 403 with a fixed "not authorized" (detail never leaks)
- Anything else → 400 with the error message, logged server-side
- No error at all on the error path → 500 "internal server error"

Called by: routers/dashboard_templates.py
Depends on: schemas/errors.py, services/errors.py
"""

from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel
from sqlalchemy.exc import NoResultFound

from ..schemas.errors import ErrorResponse
from ..services.errors import NotAuthorizedError, RecordNotFoundError


def classify_error(err: Exception | None) -> tuple[int, ErrorResponse]:
    """Map an error to (status_code, error envelope)."""
    if err is not None and isinstance(err, (RecordNotFoundError, NoResultFound)):
        return 404, ErrorResponse(errors=[str(err)])
    if err is not None and isinstance(err, NotAuthorizedError):
        return 403, ErrorResponse(errors=["not authorized"])
    if err is not None:
        logger.error("Dashboard template request failed: {}", err)
        return 400, ErrorResponse(errors=[str(err)])
    return 500, ErrorResponse(errors=["internal server error"])


def error_response(err: Exception | None) -> JSONResponse:
    status_code, body = classify_error(err)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def dashboard_response(envelope: BaseModel, err: Exception | None = None) -> JSONResponse:
    """Success envelope with 200, or the classified error envelope."""
    if err is not None:
        return error_response(err)
    return JSONResponse(status_code=200, content=envelope.model_dump(mode="json", by_alias=True))

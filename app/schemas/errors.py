"""
schemas/errors.py — Error envelope

Every failed request answers with {"errors": ["..."]}: domain errors via
routers/dashboard_responses.py, framework errors via the handlers in main.py.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    errors: list[str] = Field(default_factory=list)

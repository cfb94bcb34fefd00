"""Domain errors raised by the dashboard template services.

Routers never build error responses from these directly; they hand them
to routers/dashboard_responses.classify_error, which owns the mapping to
HTTP status codes.
"""


class DashboardTemplateError(Exception):
    """Base class for dashboard template failures."""

    default_message = "dashboard template error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class RecordNotFoundError(DashboardTemplateError):
    """The requested record does not exist."""

    default_message = "record not found"


class NotAuthorizedError(DashboardTemplateError):
    """The user does not own the record. Detail is never shown to clients."""

    default_message = "not authorized"


class TemplateValidationError(DashboardTemplateError):
    """Malformed input: bad template ID, unknown dashboard, bad payload."""

    default_message = "invalid dashboard template"

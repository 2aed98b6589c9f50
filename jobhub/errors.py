"""
Domain errors.

Each error carries the HTTP status it maps to; the API layer turns them into
JSON responses.
"""


class JobHubError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(JobHubError):
    status_code = 404
    default_message = "Resource not found"


class AuthenticationError(JobHubError):
    """Missing, malformed or expired credentials."""

    status_code = 401
    default_message = "Not authenticated"


class AuthorizationError(JobHubError):
    """Authenticated caller without the rights for this resource."""

    status_code = 403
    default_message = "Not authorized"


class ValidationError(JobHubError):
    """Malformed or missing input, with per-field detail when known."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message}])


class ConflictError(JobHubError):
    status_code = 400
    default_message = "Resource already exists"


class PersistenceError(JobHubError):
    """Unexpected datastore or file storage failure. Message is never detailed."""

    status_code = 500
    default_message = "Internal server error"

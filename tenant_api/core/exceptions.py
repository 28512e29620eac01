"""Error taxonomy shared by the repository, service and HTTP layers."""
from typing import Any, Optional


class TenantAPIError(Exception):
    """Base class for errors that carry a stable code and an HTTP status."""

    code = "internal_error"
    status_code = 500
    headers: Optional[dict] = None

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(TenantAPIError):
    """Malformed or missing input."""
    code = "validation_error"
    status_code = 400


class AuthenticationError(TenantAPIError):
    """Bearer token present but invalid or expired."""
    code = "unauthorized"
    status_code = 401
    headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(TenantAPIError):
    """Referenced tenant does not exist (or is soft-deleted)."""
    code = "not_found"
    status_code = 404


class ConstraintViolationError(TenantAPIError):
    """Referential integrity failure, e.g. an unknown parent tenant."""
    code = "constraint_violation"
    status_code = 400


class PersistenceError(TenantAPIError):
    """Unexpected database failure. The message is never shown to callers."""
    code = "persistence_error"
    status_code = 500
    public_message = "An internal error occurred"

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.public_message}


class PublishError(TenantAPIError):
    """Event delivery failure. Logged by the service, never surfaced."""
    code = "publish_error"
    status_code = 500

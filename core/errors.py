"""
core/errors.py -- Typed failures raised by the service layer.

Services raise these; api/main.py maps them to HTTP responses with a single
exception handler. Each subclass carries its HTTP status and a stable
machine-readable code, so the mapping is a lookup rather than a chain of
isinstance checks in route handlers.

Messages are safe to show to clients. Never put hashes, tokens, SQL or
stack details into a ServiceError message.

Layer rule: core/ is the kernel and imports nothing from api/, auth/, assets/.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for expected, client-visible failures."""

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConflictError(ServiceError):
    """The resource already exists (e.g. duplicate email on registration)."""

    status_code = 409
    code = "conflict"
    default_message = "Resource already exists."


class UnauthorizedError(ServiceError):
    """Bad credentials or a missing, malformed, or expired token.

    Deliberately carries no subtype: callers cannot tell a bad signature from
    an expired token or an unknown email from a wrong password.
    """

    status_code = 401
    code = "unauthorized"
    default_message = "Authentication required."


class ForbiddenError(ServiceError):
    """The resource exists but belongs to another user (mutating paths only)."""

    status_code = 403
    code = "forbidden"
    default_message = "Forbidden."


class NotFoundError(ServiceError):
    """The resource does not exist, or is hidden from the caller."""

    status_code = 404
    code = "not_found"
    default_message = "Resource not found."

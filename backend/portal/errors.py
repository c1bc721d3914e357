"""
Domain errors.

Services raise these; the HTTP layer maps them to responses in
``portal.error_handlers``. Messages are meant to be shown to the client,
so they never carry internal identifiers or stack details.

Usage:
    from portal.errors import NotFoundError

    raise NotFoundError("Membership request not found")
"""
from __future__ import annotations

from typing import Optional


class PortalError(Exception):
    status_code: int = 400
    code: str = "ERROR"
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None):
        self.message = message or self.default_message
        if code:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class ValidationError(PortalError):
    """Malformed or out-of-enumeration input (400)."""

    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request data"


class ConflictError(PortalError):
    """Duplicate handle/email on registration (409)."""

    status_code = 409
    code = "CONFLICT_ERROR"
    default_message = "Already exists"


class NotFoundError(PortalError):
    status_code = 404
    code = "NOT_FOUND_ERROR"
    default_message = "Not found"


class InvalidStateError(PortalError):
    """A transition the current state does not allow (400)."""

    status_code = 400
    code = "INVALID_STATE_ERROR"
    default_message = "Request already decided"


class AuthenticationError(PortalError):
    status_code = 401
    code = "AUTH_ERROR"
    default_message = "Invalid credentials"


class ForbiddenError(PortalError):
    status_code = 403
    code = "FORBIDDEN_ERROR"
    default_message = "Not allowed"

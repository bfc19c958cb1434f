"""Typed failures raised by the action layer.

Every action raises one of these on the first violated precondition. The
HTTP layer maps each class to a status code; nothing here knows about HTTP.
"""

from __future__ import annotations


class ActionError(Exception):
    """Base exception for action failures carrying a user-facing message."""

    default_detail = "Action failed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class UnauthorizedError(ActionError):
    """Raised when no caller identity can be resolved."""

    default_detail = "Unauthorized"


class InvalidInputError(ActionError):
    """Raised when input shape, length or a reference breaks a stated rule."""

    default_detail = "Invalid input"


class NotFoundError(ActionError):
    """Raised when a referenced hobby, community, post or comment is absent."""

    default_detail = "Not found"


class ForbiddenError(ActionError):
    """Raised when the caller lacks the required membership, authorship or role."""

    default_detail = "Forbidden"


class ConflictError(ActionError):
    """Raised when the action would break a uniqueness invariant."""

    default_detail = "Conflict"


class InternalError(ActionError):
    """Raised for store or identity-provider failures not caused by the caller."""

    default_detail = "Internal error"

"""Business logic services for the HobbyLink application.

Only dependency-free building blocks are re-exported here; the action
modules are imported directly by their callers.
"""

from .errors import (
    ActionError,
    ConflictError,
    ForbiddenError,
    InternalError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from .invalidation import ViewInvalidator

__all__ = [
    "ActionError",
    "ConflictError",
    "ForbiddenError",
    "InternalError",
    "InvalidInputError",
    "NotFoundError",
    "UnauthorizedError",
    "ViewInvalidator",
]

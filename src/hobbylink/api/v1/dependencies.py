"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from hobbylink.core.security import decode_access_token
from hobbylink.db.session import get_db
from hobbylink.services.identity import (
    CallerIdentity,
    IdentityProviderClient,
    get_identity_client,
)
from hobbylink.services.invalidation import ViewInvalidator

# Missing credentials are not rejected here; actions decide whether a caller is required.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> CallerIdentity | None:
    """Resolve the caller identity from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent

    Returns:
        The caller identity, or None for anonymous requests

    Raises:
        HTTPException: If a token was sent but cannot be validated
    """
    if credentials is None:
        return None
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err

    subject = payload.get("sub")
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CallerIdentity(subject=str(subject))


def get_identity_provider() -> IdentityProviderClient:
    """Return the shared identity provider client."""
    return get_identity_client()


def get_invalidator() -> ViewInvalidator:
    """Return a fresh collector for the views a request makes stale."""
    return ViewInvalidator()


# Type aliases for the remaining dependencies
CallerDep = Annotated[CallerIdentity | None, Depends(get_caller)]
IdentityDep = Annotated[IdentityProviderClient, Depends(get_identity_provider)]
InvalidatorDep = Annotated[ViewInvalidator, Depends(get_invalidator)]

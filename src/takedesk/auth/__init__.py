"""Takedesk Auth Module.

The current user always comes from ``client.auth.get_user()``. With the real
client that validates the Bearer token against Supabase Auth; with the
in-memory client the ``test-auth`` cookie picks the identity.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from takedesk.auth.schemas import AuthUser
from takedesk.config import Settings, get_settings
from takedesk.core.protocols import DatabaseClient
from takedesk.deps import get_db
from takedesk.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
    db: Annotated[DatabaseClient, Depends(get_db)],
) -> AuthUser:
    """
    Get the current authenticated user.

    Raises:
        UnauthorizedException: If no user can be resolved
    """
    jwt = credentials.credentials if credentials else None
    if jwt is None and not settings.test_mode:
        raise UnauthorizedException("Missing authentication token")

    try:
        response = db.auth.get_user(jwt)
    except Exception as e:  # gotrue raises AuthApiError subclasses for bad tokens
        raise UnauthorizedException(f"Invalid token: {e}") from e

    if response is None or response.user is None:
        raise UnauthorizedException("Not authenticated")

    user = AuthUser(
        id=str(response.user.id),
        email=response.user.email,
        user_metadata=response.user.user_metadata or {},
    )
    request.state.user = user.model_dump()
    return user


__all__ = [
    "get_current_user",
    "AuthUser",
]

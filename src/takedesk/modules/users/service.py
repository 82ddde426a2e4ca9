"""
Takedesk Users - Profile dependencies.

Resolve the caller's profile and guard admin-only routes.
"""

import logging
from typing import Annotated, Any

from fastapi import Depends

from takedesk.auth import get_current_user
from takedesk.auth.schemas import AuthUser
from takedesk.config import Settings, get_settings
from takedesk.core.protocols import DatabaseClient
from takedesk.deps import get_db
from takedesk.exceptions import ForbiddenException, NotFoundException
from takedesk.modules.users.repository import UsersRepository

logger = logging.getLogger(__name__)


async def get_current_profile(
    user: Annotated[AuthUser, Depends(get_current_user)],
    db: Annotated[DatabaseClient, Depends(get_db)],
) -> dict[str, Any]:
    """Profile row of the authenticated user, created on first access."""
    profile = await UsersRepository(db).ensure_profile(user)
    if not profile:
        raise NotFoundException("profile", user.id)
    return profile


def is_admin_profile(profile: dict[str, Any], settings: Settings) -> bool:
    """Admin via ``users.is_admin`` or via the ADMIN_EMAILS allow-list."""
    if profile.get("is_admin"):
        return True
    email = (profile.get("email") or "").lower()
    return bool(email) and email in settings.admin_email_list


async def require_admin_profile(
    profile: Annotated[dict[str, Any], Depends(get_current_profile)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict[str, Any]:
    if not is_admin_profile(profile, settings):
        logger.warning("Admin access denied for profile %s", profile.get("id"))
        raise ForbiddenException("Admin access required")
    return profile


require_admin = Depends(require_admin_profile)

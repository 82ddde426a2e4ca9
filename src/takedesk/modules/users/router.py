"""
Takedesk Users - Router.
"""

from typing import Any

from fastapi import APIRouter, Depends

from takedesk.modules.users.schemas import ProfileResponse
from takedesk.modules.users.service import get_current_profile

router = APIRouter(tags=["users"])


@router.get("/me", response_model=ProfileResponse)
async def get_me(profile: dict[str, Any] = Depends(get_current_profile)):
    """Current account profile."""
    return ProfileResponse.model_validate(profile)

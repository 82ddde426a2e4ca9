"""Takedesk Identity Module - identity document submissions."""

from takedesk.modules.identity.repository import IdentitiesRepository
from takedesk.modules.identity.router import router
from takedesk.modules.identity.service import IdentityService

__all__ = ["router", "IdentityService", "IdentitiesRepository"]

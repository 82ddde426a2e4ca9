"""
Takedesk Users - Repository.

Profiles live in ``users`` and are keyed by ``auth_user_id`` (the Supabase Auth
user id).
"""

import logging
from typing import Any

from postgrest.exceptions import APIError

from takedesk.auth.schemas import AuthUser
from takedesk.core.repository import BaseRepository

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = "id, auth_user_id, email, name, plan, billing_status, stripe_customer_id, is_admin, created_at"


class UsersRepository(BaseRepository[dict[str, Any]]):
    """Repository for account profiles."""

    @property
    def table_name(self) -> str:
        return "users"

    async def get_by_auth_user_id(self, auth_user_id: str) -> dict[str, Any] | None:
        response = (
            self.table.select(PROFILE_COLUMNS)
            .eq("auth_user_id", auth_user_id)
            .maybe_single()
            .execute()
        )
        return response.data if response else None

    async def ensure_profile(self, auth_user: AuthUser) -> dict[str, Any] | None:
        """
        Return the profile for ``auth_user``, creating it on first sight.

        Returns None when the profile cannot be created (no email) or read back.
        """
        existing = await self.get_by_auth_user_id(auth_user.id)
        if existing:
            return existing

        if not auth_user.email:
            return None

        payload = {
            "auth_user_id": auth_user.id,
            "email": auth_user.email,
            "name": auth_user.full_name,
        }
        self.table.upsert(payload, on_conflict="auth_user_id").execute()
        logger.info("Created profile for auth user %s", auth_user.id)

        try:
            response = (
                self.table.select(PROFILE_COLUMNS)
                .eq("auth_user_id", auth_user.id)
                .single()
                .execute()
            )
        except APIError as e:
            logger.warning("Profile for %s not readable after upsert: %s", auth_user.id, e.message)
            return None
        return response.data

    async def is_admin(self, auth_user_id: str | None) -> bool:
        if not auth_user_id:
            return False
        response = (
            self.table.select("is_admin")
            .eq("auth_user_id", auth_user_id)
            .maybe_single()
            .execute()
        )
        row = response.data if response else None
        return bool(row and row.get("is_admin"))

    async def list_profiles(self) -> list[dict[str, Any]]:
        response = self.table.select(PROFILE_COLUMNS).order("created_at", desc=True).execute()
        return response.data or []

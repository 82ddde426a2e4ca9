"""
Takedesk Identity - Repository.
"""

from typing import Any

from takedesk.core.repository import BaseRepository


class IdentitiesRepository(BaseRepository[dict[str, Any]]):
    """Repository for identity document submissions."""

    @property
    def table_name(self) -> str:
        return "identities"

    async def latest_for_user(self, user_id: str) -> dict[str, Any] | None:
        response = (
            self.table.select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return rows[0] if rows else None

    async def update_for_user(self, identity_id: str, user_id: str, data: dict[str, Any]) -> dict[str, Any] | None:
        response = self.table.update(data).eq("id", identity_id).eq("user_id", user_id).execute()
        rows = response.data or []
        return rows[0] if rows else None

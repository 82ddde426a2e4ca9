"""
Takedesk Findings - Repository.

Database operations for findings and takedown records.
"""

from typing import Any

from takedesk.core.repository import BaseRepository


class FindingsRepository(BaseRepository[dict[str, Any]]):
    """Repository for findings."""

    @property
    def table_name(self) -> str:
        return "findings"

    async def list_for_user(self, user_id: str, status: str | None = None) -> list[dict[str, Any]]:
        """Findings of one user, newest first, optionally narrowed by status."""
        query = self.table.select("id, user_id, url, source_type, status, evidence, created_at").eq("user_id", user_id)
        if status:
            query = query.eq("status", status)
        response = query.order("created_at", desc=True).execute()
        return response.data or []

    async def list_all(self) -> list[dict[str, Any]]:
        response = self.table.select("*").order("created_at", desc=True).execute()
        return response.data or []

    async def statuses_for_user(self, user_id: str) -> list[dict[str, Any]]:
        response = self.table.select("id, status").eq("user_id", user_id).execute()
        return response.data or []

    async def set_status(self, finding_id: str, status: str, user_id: str | None = None) -> list[dict[str, Any]]:
        """Set the status of a finding (scoped to ``user_id`` when given)."""
        query = self.table.update({"status": status}).eq("id", finding_id)
        if user_id is not None:
            query = query.eq("user_id", user_id)
        return query.execute().data or []


class TakedownsRepository(BaseRepository[dict[str, Any]]):
    """Repository for takedown records."""

    @property
    def table_name(self) -> str:
        return "takedowns"

    async def results_for_user(self, user_id: str) -> list[dict[str, Any]]:
        response = self.table.select("finding_id, result").eq("user_id", user_id).execute()
        return response.data or []

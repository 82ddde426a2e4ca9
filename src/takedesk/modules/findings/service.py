"""
Takedesk Findings - Service.

Business logic for the findings review flow: users approve a finding (which
files a takedown request) or reject it; admins create findings and move them
through their statuses.
"""

import logging
from typing import Any

from takedesk.core.protocols import DatabaseClient
from takedesk.core.table_store import utcnow_iso
from takedesk.exceptions import NotFoundException
from takedesk.modules.findings.repository import FindingsRepository, TakedownsRepository
from takedesk.modules.findings.schemas import FindingCreateRequest, FindingStats

logger = logging.getLogger(__name__)

TAKEDOWN_CHANNEL = "search_form"


class FindingsService:
    """Service for findings and takedowns."""

    def __init__(self, db: DatabaseClient | None = None):
        self.findings = FindingsRepository(db)
        self.takedowns = TakedownsRepository(db)

    async def list_findings(self, user_id: str, status: str | None = None) -> list[dict[str, Any]]:
        return await self.findings.list_for_user(user_id, status=status)

    async def get_stats(self, user_id: str) -> FindingStats:
        """
        Count removed and delisted findings.

        A finding counts once per outcome whether the status sits on the finding
        itself or on one of its takedown records. Takedowns without a finding
        each count separately.
        """
        removed: set[str] = set()
        delisted: set[str] = set()

        for row in await self.findings.statuses_for_user(user_id):
            status = (row.get("status") or "").lower()
            if status == "removed":
                removed.add(row["id"])
            elif status == "delisted":
                delisted.add(row["id"])

        fallback = 0
        for row in await self.takedowns.results_for_user(user_id):
            result = (row.get("result") or "").lower()
            if result not in ("removed", "delisted"):
                continue
            key = row.get("finding_id")
            if key is None:
                key = f"{result}:{fallback}"
                fallback += 1
            (removed if result == "removed" else delisted).add(key)

        return FindingStats(removed=len(removed), delisted=len(delisted), total=len(removed) + len(delisted))

    async def approve(self, finding_id: str, user_id: str) -> tuple[dict[str, Any], dict[str, Any]]:
        """Mark the user's finding Pending and file a takedown request for it."""
        updated = await self.findings.set_status(finding_id, "Pending", user_id=user_id)
        if not updated:
            raise NotFoundException("finding", finding_id)

        takedown = await self.takedowns.create(
            {
                "finding_id": finding_id,
                "user_id": user_id,
                "channel": TAKEDOWN_CHANNEL,
                "submitted_at": utcnow_iso(),
            }
        )
        logger.info("Finding %s approved, takedown %s filed", finding_id, takedown["id"])
        return updated[0], takedown

    async def reject(self, finding_id: str, user_id: str) -> dict[str, Any]:
        updated = await self.findings.set_status(finding_id, "Rejected", user_id=user_id)
        if not updated:
            raise NotFoundException("finding", finding_id)
        logger.info("Finding %s rejected", finding_id)
        return updated[0]

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------

    async def list_all(self) -> list[dict[str, Any]]:
        return await self.findings.list_all()

    async def create(self, request: FindingCreateRequest) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "user_id": request.user_id,
            "url": request.url.strip(),
            "source_type": request.source_type.strip(),
            "status": "Found",
        }
        if request.note and request.note.strip():
            payload["evidence"] = {"note": request.note.strip()}
        finding = await self.findings.create(payload)
        logger.info("Finding %s created for user %s", finding["id"], request.user_id)
        return finding

    async def set_status(self, finding_id: str, status: str) -> dict[str, Any]:
        updated = await self.findings.set_status(finding_id, status)
        if not updated:
            raise NotFoundException("finding", finding_id)
        return updated[0]

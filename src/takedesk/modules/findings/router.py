"""
Takedesk Findings - Router.

Findings of the signed-in user.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from takedesk.core.protocols import DatabaseClient
from takedesk.deps import get_db
from takedesk.modules.findings.schemas import (
    FindingActionResponse,
    FindingListResponse,
    FindingStats,
    FindingStatus,
)
from takedesk.modules.findings.service import FindingsService
from takedesk.modules.users.service import get_current_profile

router = APIRouter(prefix="/findings", tags=["findings"])


def get_service(db: Annotated[DatabaseClient, Depends(get_db)]) -> FindingsService:
    """Get findings service bound to the request client."""
    return FindingsService(db)


@router.get("", response_model=FindingListResponse)
async def list_findings(
    status: FindingStatus | None = Query(default=None),
    profile: dict[str, Any] = Depends(get_current_profile),
    service: FindingsService = Depends(get_service),
):
    """List the user's findings, newest first."""
    items = await service.list_findings(profile["id"], status=status)
    return {"items": items}


@router.get("/stats", response_model=FindingStats)
async def get_stats(
    profile: dict[str, Any] = Depends(get_current_profile),
    service: FindingsService = Depends(get_service),
):
    """Removed / delisted counters for the dashboard."""
    return await service.get_stats(profile["id"])


@router.post("/{finding_id}/approve", response_model=FindingActionResponse)
async def approve_finding(
    finding_id: str,
    profile: dict[str, Any] = Depends(get_current_profile),
    service: FindingsService = Depends(get_service),
):
    """Approve a finding and file a takedown request."""
    finding, takedown = await service.approve(finding_id, profile["id"])
    return {"finding": finding, "takedown": takedown}


@router.post("/{finding_id}/reject", response_model=FindingActionResponse)
async def reject_finding(
    finding_id: str,
    profile: dict[str, Any] = Depends(get_current_profile),
    service: FindingsService = Depends(get_service),
):
    """Reject a finding."""
    finding = await service.reject(finding_id, profile["id"])
    return {"finding": finding}

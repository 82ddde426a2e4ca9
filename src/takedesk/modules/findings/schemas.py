"""
Takedesk Findings - Schemas.

Pydantic models for findings and takedown records.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

FindingStatus = Literal["Found", "Pending", "Submitted", "Removed", "Rejected"]


# =============================================================================
# Request Schemas
# =============================================================================


class FindingCreateRequest(BaseModel):
    """Manual finding created by an admin for a user."""

    user_id: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    source_type: str = Field(..., min_length=1)
    note: str | None = None


class FindingStatusUpdate(BaseModel):
    status: FindingStatus


# =============================================================================
# Response Schemas
# =============================================================================


class FindingResponse(BaseModel):
    id: str
    user_id: str | None = None
    url: str
    source_type: str | None = None
    status: str | None = None
    evidence: dict[str, Any] | None = None
    created_at: str | None = None


class FindingListResponse(BaseModel):
    items: list[FindingResponse]


class FindingStats(BaseModel):
    """Counts of findings taken down, by outcome."""

    removed: int = 0
    delisted: int = 0
    total: int = 0


class TakedownResponse(BaseModel):
    id: str
    finding_id: str | None = None
    user_id: str | None = None
    channel: str | None = None
    submitted_at: str | None = None
    result: str | None = None
    created_at: str | None = None


class FindingActionResponse(BaseModel):
    finding: FindingResponse
    takedown: TakedownResponse | None = None

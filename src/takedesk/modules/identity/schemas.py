"""
Takedesk Identity - Schemas.
"""

from typing import Literal

from pydantic import BaseModel

IdentityState = Literal["missing", "uploaded", "verified"]


class IdentityRecord(BaseModel):
    id: str
    user_id: str | None = None
    doc_type: str | None = None
    doc_url: str | None = None
    status: str | None = None
    verified_at: str | None = None
    created_at: str | None = None


class IdentityStatusResponse(BaseModel):
    """Latest submission of the user and its review state."""

    state: IdentityState
    identity: IdentityRecord | None = None

"""
Takedesk Users - Schemas.
"""

from pydantic import BaseModel


class ProfileResponse(BaseModel):
    """Account profile (row of ``users``)."""

    id: str
    auth_user_id: str
    email: str | None = None
    name: str | None = None
    plan: str | None = None
    billing_status: str | None = None
    stripe_customer_id: str | None = None
    is_admin: bool = False
    created_at: str | None = None


class ProfileListResponse(BaseModel):
    items: list[ProfileResponse]

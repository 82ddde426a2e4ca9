"""
Takedesk Auth - Schemas.

Pydantic models for the authenticated user.
"""

from typing import Any

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """User as reported by Supabase Auth (``auth.get_user()``)."""

    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def full_name(self) -> str | None:
        return self.user_metadata.get("full_name")

"""
Takedesk Billing - Schemas.
"""

from pydantic import BaseModel

PLANS = ("starter", "pro")


class CheckoutRequest(BaseModel):
    # Unknown plans are rejected by the service with a 400, not by validation
    plan: str | None = None


class CheckoutResponse(BaseModel):
    url: str


class BillingStatusResponse(BaseModel):
    """Plan summary shown on the billing page."""

    plan: str | None = None
    billing_status: str | None = None
    has_customer: bool = False
    checkout_available: bool = False

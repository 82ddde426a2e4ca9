"""Takedesk Billing Module - subscription checkout."""

from takedesk.modules.billing.router import router
from takedesk.modules.billing.service import BillingService

__all__ = ["router", "BillingService"]

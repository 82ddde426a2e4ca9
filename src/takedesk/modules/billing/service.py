"""
Takedesk Billing - Service.

Subscription checkout through Stripe. Plan and billing status on the profile
are written by the payment provider's webhooks, which live outside this
service; here they are only read.
"""

import logging
from typing import Any

import stripe

from takedesk.config import Settings
from takedesk.exceptions import (
    BillingNotConfiguredException,
    PaymentProviderException,
    ValidationException,
)
from takedesk.modules.billing.schemas import PLANS, BillingStatusResponse

logger = logging.getLogger(__name__)


class BillingService:
    """Service for subscription checkout."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def status(self, profile: dict[str, Any]) -> BillingStatusResponse:
        return BillingStatusResponse(
            plan=profile.get("plan"),
            billing_status=profile.get("billing_status"),
            has_customer=bool(profile.get("stripe_customer_id")),
            checkout_available=self.settings.billing_configured,
        )

    def create_checkout(self, profile: dict[str, Any], plan: str | None) -> str:
        """
        Open a Stripe subscription checkout session for ``plan``.

        Existing Stripe customers are reused; otherwise Stripe collects the
        profile email. The session metadata links it back to the profile and
        the auth user. Returns the hosted checkout URL.
        """
        if not self.settings.billing_configured:
            raise BillingNotConfiguredException()
        if plan not in PLANS:
            raise ValidationException("Invalid plan requested")

        site_url = self.settings.site_url.rstrip("/")
        params: dict[str, Any] = {
            "mode": "subscription",
            "payment_method_types": ["card"],
            "line_items": [{"price": self.settings.stripe.price_for(plan), "quantity": 1}],
            "success_url": f"{site_url}/?checkout=success&session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": f"{site_url}/?checkout=cancelled",
            "metadata": {
                "plan": plan,
                "auth_user_id": profile.get("auth_user_id"),
                "user_id": profile["id"],
            },
        }
        if profile.get("stripe_customer_id"):
            params["customer"] = profile["stripe_customer_id"]
        elif profile.get("email"):
            params["customer_email"] = profile["email"]

        try:
            session = stripe.checkout.Session.create(api_key=self.settings.stripe.secret_key, **params)
        except stripe.StripeError as e:
            logger.error("Stripe checkout failed for profile %s: %s", profile["id"], e)
            raise PaymentProviderException("Unable to start checkout") from e

        logger.info("Checkout session created for profile %s (plan=%s)", profile["id"], plan)
        return session.url

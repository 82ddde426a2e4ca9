"""
Takedesk Billing - Router.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from takedesk.config import Settings, get_settings
from takedesk.exceptions import BillingNotConfiguredException
from takedesk.modules.billing.schemas import BillingStatusResponse, CheckoutRequest, CheckoutResponse
from takedesk.modules.billing.service import BillingService
from takedesk.modules.users.service import get_current_profile

router = APIRouter(tags=["billing"])


def get_service(settings: Annotated[Settings, Depends(get_settings)]) -> BillingService:
    return BillingService(settings)


async def check_billing_configured(settings: Annotated[Settings, Depends(get_settings)]) -> None:
    """Answer 503 before authentication when Stripe is not set up."""
    if not settings.billing_configured:
        raise BillingNotConfiguredException()


@router.get("/billing", response_model=BillingStatusResponse)
async def get_billing(
    profile: dict[str, Any] = Depends(get_current_profile),
    service: BillingService = Depends(get_service),
):
    """Current plan and whether checkout can be started."""
    return service.status(profile)


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
    dependencies=[Depends(check_billing_configured)],
)
async def create_checkout(
    request: CheckoutRequest,
    profile: dict[str, Any] = Depends(get_current_profile),
    service: BillingService = Depends(get_service),
):
    """Start a subscription checkout for the starter or pro plan."""
    return CheckoutResponse(url=service.create_checkout(profile, request.plan))

"""
Takedesk - Custom Exceptions.

Centralized exception handling with standardized error responses.
"""

from typing import Any


class TakedeskException(Exception):
    """Base exception for Takedesk application."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class UnauthorizedException(TakedeskException):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401,
        )


class ForbiddenException(TakedeskException):
    """Raised when user lacks required permissions."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            code="FORBIDDEN",
            message=message,
            status_code=403,
        )


class NotFoundException(TakedeskException):
    """Raised when a resource is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            code="NOT_FOUND",
            message=f"{resource_type} not found: {resource_id}",
            status_code=404,
            details={"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class ValidationException(TakedeskException):
    """Raised for validation errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details={"errors": errors} if errors else None,
        )


class TestModeDisabledException(TakedeskException):
    """Raised when a test-only endpoint is called outside test mode."""

    def __init__(self):
        super().__init__(
            code="TEST_MODE_DISABLED",
            message="Test mode disabled",
            status_code=404,
        )


class BillingNotConfiguredException(TakedeskException):
    """Raised when checkout is requested without Stripe configuration."""

    def __init__(self):
        super().__init__(
            code="STRIPE_NOT_CONFIGURED",
            message="Billing is not configured",
            status_code=503,
        )


class PaymentProviderException(TakedeskException):
    """Raised when the payment provider rejects a request."""

    def __init__(self, message: str):
        super().__init__(
            code="PAYMENT_PROVIDER_ERROR",
            message=message,
            status_code=502,
        )

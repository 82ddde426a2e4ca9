"""
Takedesk - Dependency Injection.

FastAPI dependencies for settings, the per-request database client and guards.
"""

from typing import Annotated

from fastapi import Depends, Request

from takedesk.config import Settings, get_settings
from takedesk.core.memory_client import TEST_AUTH_COOKIE
from takedesk.core.protocols import DatabaseClient
from takedesk.core.supabase_client import get_request_client
from takedesk.exceptions import TestModeDisabledException


# =============================================================================
# Request Context
# =============================================================================


def get_db(request: Request) -> DatabaseClient:
    """Database client for this request (in-memory in test mode)."""
    return get_request_client(lambda: request.cookies.get(TEST_AUTH_COOKIE))


# =============================================================================
# Guards
# =============================================================================


def check_test_mode(settings: Annotated[Settings, Depends(get_settings)]) -> bool:
    if not settings.test_mode:
        raise TestModeDisabledException()
    return True


require_test_mode = Depends(check_test_mode)

"""
Takedesk Core - Supabase Client.

Provides the configured database client. With TEST_MODE enabled every caller
gets the in-memory client instead of a real Supabase connection.
"""

from functools import lru_cache
from typing import Callable

from supabase import Client, create_client

from takedesk.config import get_settings
from takedesk.core.memory_client import create_memory_server_client, create_memory_service_client
from takedesk.core.protocols import DatabaseClient


@lru_cache
def _create_real_client(url: str, key: str) -> Client:
    return create_client(supabase_url=url, supabase_key=key)


def get_supabase_client() -> DatabaseClient:
    """
    Get configured Supabase client.

    Uses service role key for server-side operations.
    The real client is cached; the in-memory one is cheap and never cached.
    """
    settings = get_settings()
    if settings.test_mode:
        return create_memory_service_client()
    return _create_real_client(settings.supabase.url, settings.supabase.service_role_key)


def get_request_client(get_test_auth_marker: Callable[[], str | None] | None = None) -> DatabaseClient:
    """
    Get the client for one request.

    In test mode the identity is chosen by the test-auth marker (see
    ``resolve_auth_user``); otherwise this is the service client and the user is
    resolved from the bearer token.
    """
    if get_settings().test_mode:
        return create_memory_server_client(get_test_auth_marker)
    return get_supabase_client()

"""
Takedesk Core.

- table_store: process-wide in-memory tables (test mode)
- query_builder / mutations: chainable read and write operations on the store
- memory_client: Supabase-shaped client over the store
- supabase_client: selects the real or in-memory client
- repository: base repository typed against the client contract
"""

from takedesk.core.errors import RowNotFoundError, UnknownTableError
from takedesk.core.memory_client import (
    MemoryClient,
    create_memory_browser_client,
    create_memory_server_client,
    create_memory_service_client,
    resolve_auth_user,
    resolve_auth_user_from_cookie_header,
)
from takedesk.core.query_builder import QueryResponse
from takedesk.core.table_store import get_store, reset_store

__all__ = [
    "MemoryClient",
    "QueryResponse",
    "RowNotFoundError",
    "UnknownTableError",
    "create_memory_browser_client",
    "create_memory_server_client",
    "create_memory_service_client",
    "get_store",
    "reset_store",
    "resolve_auth_user",
    "resolve_auth_user_from_cookie_header",
]

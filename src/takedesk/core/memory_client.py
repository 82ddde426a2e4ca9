"""
Takedesk Core - In-memory Supabase client.

Drop-in stand-in for ``supabase.Client`` used when TEST_MODE is on. Table
operations go to the process-wide store; ``auth.get_user()`` answers with the
seeded identity unless the test-auth marker says ``none``.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable
from urllib.parse import unquote

from pydantic import BaseModel, Field

from takedesk.core.mutations import DeleteQuery, InsertQuery, UpdateQuery
from takedesk.core.query_builder import SelectQuery
from takedesk.core.table_store import Row, Store, get_store

logger = logging.getLogger(__name__)

TEST_AUTH_COOKIE = "test-auth"
NO_IDENTITY_MARKER = "none"

_COOKIE_RE = re.compile(rf"(?:^|;)\s*{re.escape(TEST_AUTH_COOKIE)}=([^;]+)")


# =============================================================================
# Identity resolution
# =============================================================================


def resolve_auth_user(store: Store, marker: str | None = None) -> dict[str, Any] | None:
    """Map a test-auth marker to the seeded identity, or None for ``"none"``."""
    if marker == NO_IDENTITY_MARKER:
        return None
    return store.auth_user


def resolve_auth_user_from_cookie_header(store: Store, cookie_header: str | None) -> dict[str, Any] | None:
    """Browser-side variant: read the marker out of a raw Cookie header."""
    match = _COOKIE_RE.search(cookie_header or "")
    marker = unquote(match.group(1)) if match else None
    return resolve_auth_user(store, marker)


class MemoryAuthUser(BaseModel):
    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)


class MemoryUserResponse(BaseModel):
    """Same shape as gotrue's UserResponse."""

    user: MemoryAuthUser | None = None


class MemoryAuth:
    def __init__(self, auth_user: dict[str, Any] | None):
        self._auth_user = auth_user

    def get_user(self, jwt: str | None = None) -> MemoryUserResponse:
        if self._auth_user is None:
            return MemoryUserResponse(user=None)
        return MemoryUserResponse(user=MemoryAuthUser.model_validate(self._auth_user).model_copy(deep=True))


# =============================================================================
# Storage
# =============================================================================


class UploadResult(BaseModel):
    path: str
    full_path: str


class MemoryBucket:
    """Accepts uploads without keeping them; public URLs are synthetic."""

    def __init__(self, bucket: str):
        self.bucket = bucket

    def upload(self, path: str, file: Any, file_options: dict[str, Any] | None = None) -> UploadResult:
        logger.debug("storage upload %s/%s", self.bucket, path)
        return UploadResult(path=path, full_path=f"{self.bucket}/{path}")

    def get_public_url(self, path: str) -> str:
        return f"https://storage.test/{path}"

    def list(self, path: str | None = None, options: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return []


class MemoryStorage:
    def from_(self, bucket: str) -> MemoryBucket:
        return MemoryBucket(bucket)


# =============================================================================
# Tables
# =============================================================================


class MemoryTable:
    """``client.table(name)``: entry point for reads and writes on one table."""

    def __init__(self, table: str):
        get_store().rows(table)  # raises UnknownTableError outside the schema
        self.table = table

    def select(self, *columns: str, count: str | None = None) -> SelectQuery:
        return SelectQuery(self.table, columns or ("*",), count=count)

    def insert(self, json: Row | Iterable[Row]) -> InsertQuery:
        return InsertQuery(self.table, json)

    def upsert(self, json: Row | Iterable[Row], *, on_conflict: str = "") -> InsertQuery:
        return InsertQuery(self.table, json, on_conflict=on_conflict or None, upsert=True)

    def update(self, json: Row) -> UpdateQuery:
        return UpdateQuery(self.table, json)

    def delete(self) -> DeleteQuery:
        return DeleteQuery(self.table)


class MemoryClient:
    """Client bound to one resolved identity; tables always hit the current store."""

    def __init__(self, auth_user: dict[str, Any] | None):
        self.auth = MemoryAuth(auth_user)
        self.storage = MemoryStorage()

    def table(self, table_name: str) -> MemoryTable:
        return MemoryTable(table_name)

    def from_(self, table_name: str) -> MemoryTable:
        return self.table(table_name)


def create_memory_server_client(get_test_auth_marker: Callable[[], str | None] | None = None) -> MemoryClient:
    """Server-side client; the marker usually comes from the ``test-auth`` cookie."""
    marker = get_test_auth_marker() if get_test_auth_marker else None
    return MemoryClient(resolve_auth_user(get_store(), marker))


def create_memory_browser_client(cookie_header: str | None = None) -> MemoryClient:
    return MemoryClient(resolve_auth_user_from_cookie_header(get_store(), cookie_header))


def create_memory_service_client() -> MemoryClient:
    return create_memory_server_client()

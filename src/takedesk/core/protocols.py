"""
Takedesk Core - Database client contract.

Structural types satisfied by both ``supabase.Client`` and ``MemoryClient``.
Repositories and services are typed against these, never against either
concrete client.
"""

from __future__ import annotations

from typing import Any, Protocol


class ExecutableQueryLike(Protocol):
    def execute(self) -> Any: ...


class FilterQueryLike(ExecutableQueryLike, Protocol):
    def eq(self, column: str, value: Any) -> "FilterQueryLike": ...


class SelectQueryLike(FilterQueryLike, Protocol):
    def order(self, column: str, *, desc: bool = False) -> "SelectQueryLike": ...

    def limit(self, size: int) -> "SelectQueryLike": ...

    def range(self, start: int, end: int) -> "SelectQueryLike": ...

    def single(self) -> "SelectQueryLike": ...

    def maybe_single(self) -> "SelectQueryLike": ...


class TableQuery(Protocol):
    def select(self, *columns: str, count: Any = None) -> SelectQueryLike: ...

    def insert(self, json: Any) -> ExecutableQueryLike: ...

    def upsert(self, json: Any, *, on_conflict: str = "") -> ExecutableQueryLike: ...

    def update(self, json: dict[str, Any]) -> FilterQueryLike: ...

    def delete(self) -> FilterQueryLike: ...


class AuthClient(Protocol):
    def get_user(self, jwt: str | None = None) -> Any: ...


class DatabaseClient(Protocol):
    auth: AuthClient
    storage: Any

    def table(self, table_name: str) -> TableQuery: ...

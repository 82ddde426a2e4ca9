"""
Takedesk Core - Query builder for the in-memory store.

Mirrors the chainable postgrest-py read surface:

    client.table("findings").select("id, status").eq("user_id", uid).order("created_at", desc=True).execute()

Filters, ordering and limits are only recorded until ``execute()`` (or ``await``)
evaluates them against the current table contents.
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel

from takedesk.core.errors import RowNotFoundError
from takedesk.core.table_store import Row, clone_row, get_store

_MISSING = object()

RowFilter = Callable[[Row], bool]


def _same_value(stored: Any, wanted: Any) -> bool:
    # bools never equal numbers, unlike Python's True == 1
    if isinstance(stored, bool) != isinstance(wanted, bool):
        return False
    return stored == wanted


class QueryResponse(BaseModel):
    """Result of an executed query (same fields as postgrest's APIResponse)."""

    data: Any = None
    count: int | None = None


class FilterQuery:
    """Base for builders that select target rows by equality filters."""

    def __init__(self, table: str):
        self.table = table
        self._filters: list[RowFilter] = []

    def eq(self, column: str, value: Any):
        """Keep rows whose ``column`` equals ``value`` (AND with earlier filters)."""
        self._filters.append(lambda row: _same_value(row.get(column, _MISSING), value))
        return self

    def match(self, query: dict[str, Any]):
        for column, value in query.items():
            self.eq(column, value)
        return self

    def _matches(self, row: Row) -> bool:
        return all(fn(row) for fn in self._filters)

    def _matching_rows(self) -> list[Row]:
        """Live (uncopied) rows matching every filter, in table order."""
        return [row for row in get_store().rows(self.table) if self._matches(row)]

    def execute(self) -> QueryResponse:
        raise NotImplementedError

    async def _resolve(self) -> QueryResponse:
        return self.execute()

    def __await__(self):
        return self._resolve().__await__()


def _parse_columns(columns: tuple[str, ...]) -> list[str] | None:
    names = [c.strip() for part in columns for c in part.split(",") if c.strip()]
    if not names or "*" in names:
        return None
    return names


def _sort_key_factory(values: list[Any]) -> Callable[[Any], Any]:
    kinds = set()
    for value in values:
        if value is None:
            kinds.add("none")
        elif isinstance(value, bool):
            kinds.add("bool")
        elif isinstance(value, (int, float)):
            kinds.add("number")
        elif isinstance(value, str):
            kinds.add("str")
        else:
            kinds.add("other")

    if len(kinds) == 1 and kinds.pop() in ("bool", "number", "str"):
        return lambda value: value
    return lambda value: "" if value is None else str(value)


class SelectQuery(FilterQuery):
    """Lazily evaluated read pipeline: filters -> order -> limit/range -> copy."""

    def __init__(self, table: str, columns: tuple[str, ...] = ("*",), count: str | None = None):
        super().__init__(table)
        self._columns = _parse_columns(columns)
        self._count = count
        self._order: tuple[str, bool] | None = None
        self._offset = 0
        self._limit: int | None = None
        self._mode: str = "many"

    def order(self, column: str, *, desc: bool = False) -> "SelectQuery":
        """Sort by ``column``. Replaces any earlier order."""
        self._order = (column, desc)
        return self

    def limit(self, size: int) -> "SelectQuery":
        self._limit = size
        return self

    def range(self, start: int, end: int) -> "SelectQuery":
        """Inclusive row window, as in postgrest."""
        self._offset = start
        self._limit = max(end - start + 1, 0)
        return self

    def single(self) -> "SelectQuery":
        """Return one row; ``execute()`` raises RowNotFoundError when none match."""
        self._mode = "single"
        return self

    def maybe_single(self) -> "SelectQuery":
        """Return one row or None."""
        self._mode = "maybe_single"
        return self

    def _project(self, row: Row) -> Row:
        if self._columns is None:
            return clone_row(row)
        return clone_row({c: row[c] for c in self._columns if c in row})

    def _evaluate(self) -> tuple[list[Row], int]:
        rows = self._matching_rows()
        total = len(rows)

        if self._order is not None:
            column, desc = self._order
            key = _sort_key_factory([row.get(column) for row in rows])
            # list.sort is stable, including with reverse=True.
            rows = sorted(rows, key=lambda row: key(row.get(column)), reverse=desc)

        if self._offset:
            rows = rows[self._offset :]
        if self._limit is not None:
            rows = rows[: self._limit]

        return [self._project(row) for row in rows], total

    def execute(self) -> QueryResponse:
        rows, total = self._evaluate()
        count = total if self._count else None

        if self._mode == "single":
            if not rows:
                raise RowNotFoundError(self.table)
            return QueryResponse(data=rows[0], count=count)
        if self._mode == "maybe_single":
            return QueryResponse(data=rows[0] if rows else None, count=count)
        return QueryResponse(data=rows, count=count)

"""
Takedesk Core - Mutations for the in-memory store.

insert / upsert write to the store when called directly and are deferred
until ``execute()`` through ``InsertQuery``; update / delete are filter
builders that apply on ``execute()``. Every operation returns deep copies of
the affected rows and none of them raise domain errors.
"""

from __future__ import annotations

import logging
from typing import Iterable

from takedesk.core.query_builder import FilterQuery, QueryResponse
from takedesk.core.table_store import TABLE_DEFAULTS, Row, Store, clone_row, get_store, utcnow_iso

logger = logging.getLogger(__name__)


def _as_rows(values: Row | Iterable[Row]) -> list[Row]:
    if isinstance(values, dict):
        return [dict(values)]
    return [dict(v) for v in values]


def _prepare_new_row(store: Store, table: str, record: Row) -> Row:
    for column, default in TABLE_DEFAULTS.get(table, {}).items():
        record.setdefault(column, default)
    if not record.get("id"):
        record["id"] = store.next_id(table)
    if not record.get("created_at"):
        record["created_at"] = utcnow_iso()
    return record


def insert_rows(table: str, values: Row | Iterable[Row]) -> list[Row]:
    """Append one or many rows, filling id / created_at / table defaults."""
    store = get_store()
    rows = store.rows(table)
    inserted = []
    for item in _as_rows(values):
        record = _prepare_new_row(store, table, clone_row(item))
        rows.append(record)
        inserted.append(clone_row(record))
    logger.debug("insert %s: %d row(s)", table, len(inserted))
    return inserted


def upsert_rows(table: str, values: Row | Iterable[Row], on_conflict: str | None = None) -> list[Row]:
    """Merge rows into existing ones sharing ``on_conflict``, insert the rest.

    Merged rows keep every field the input does not mention, including their
    id and any table default already stored.
    """
    store = get_store()
    rows = store.rows(table)
    result = []
    for item in _as_rows(values):
        incoming = clone_row(item)
        key = incoming.get(on_conflict) if on_conflict else None

        existing = None
        if key is not None:
            existing = next((row for row in rows if row.get(on_conflict) == key), None)

        if existing is not None:
            # the stored id always wins on merge
            incoming.pop("id", None)
            existing.update(incoming)
            if not existing.get("created_at"):
                existing["created_at"] = utcnow_iso()
            result.append(clone_row(existing))
            continue

        record = _prepare_new_row(store, table, incoming)
        rows.append(record)
        result.append(clone_row(record))
    logger.debug("upsert %s on %s: %d row(s)", table, on_conflict, len(result))
    return result


class InsertQuery:
    """Deferred ``insert``/``upsert``; runs on ``execute()`` like postgrest."""

    def __init__(self, table: str, values: Row | Iterable[Row], on_conflict: str | None = None, upsert: bool = False):
        self.table = table
        self._values = _as_rows(values)
        self._on_conflict = on_conflict
        self._upsert = upsert

    def execute(self) -> QueryResponse:
        if self._upsert:
            return QueryResponse(data=upsert_rows(self.table, self._values, self._on_conflict))
        return QueryResponse(data=insert_rows(self.table, self._values))

    async def _resolve(self) -> QueryResponse:
        return self.execute()

    def __await__(self):
        return self._resolve().__await__()


class UpdateQuery(FilterQuery):
    """``table.update(values).eq(...)``: merge ``values`` into every match."""

    def __init__(self, table: str, values: Row):
        super().__init__(table)
        self._values = clone_row(values)

    def execute(self) -> QueryResponse:
        matches = self._matching_rows()
        for row in matches:
            row.update(clone_row(self._values))
        logger.debug("update %s: %d row(s)", self.table, len(matches))
        return QueryResponse(data=[clone_row(row) for row in matches])


class DeleteQuery(FilterQuery):
    """``table.delete().eq(...)``: remove every match."""

    def execute(self) -> QueryResponse:
        rows = get_store().rows(self.table)
        removed = [row for row in rows if self._matches(row)]
        rows[:] = [row for row in rows if not self._matches(row)]
        logger.debug("delete %s: %d row(s)", self.table, len(removed))
        return QueryResponse(data=[clone_row(row) for row in removed])

"""
Takedesk Core - In-memory table store.

Process-wide store backing the test-mode Supabase client: the four application
tables, a per-table id counter and the simulated authenticated identity.
Access it only through ``get_store()`` / ``reset_store()``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from takedesk.core.errors import UnknownTableError

logger = logging.getLogger(__name__)

Row = dict[str, Any]

TABLE_NAMES: tuple[str, ...] = ("users", "identities", "findings", "takedowns")

# Fields applied to rows that are genuinely new (insert path only).
TABLE_DEFAULTS: dict[str, Row] = {
    "users": {"is_admin": False},
    "identities": {"status": "submitted"},
}

SEED_AUTH_USER_ID = "auth-test-user"
SEED_AUTH_EMAIL = "test@example.com"
SEED_PROFILE_ID = "user-1"


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def clone_row(row: Row) -> Row:
    """Deep copy a row so callers never alias store state."""
    return copy.deepcopy(row)


@dataclass
class Store:
    auth_user: dict[str, Any] | None
    tables: dict[str, list[Row]] = field(default_factory=dict)
    counters: dict[str, int] = field(default_factory=dict)

    def rows(self, table: str) -> list[Row]:
        """Live row list for ``table``. Mutating it mutates the store."""
        try:
            return self.tables[table]
        except KeyError:
            raise UnknownTableError(table) from None

    def next_id(self, table: str) -> str:
        """Next ``{table}-{n}`` id, skipping ids callers already inserted."""
        if table not in self.counters:
            raise UnknownTableError(table)
        taken = {row.get("id") for row in self.tables.get(table, [])}
        self.counters[table] += 1
        while f"{table}-{self.counters[table]}" in taken:
            self.counters[table] += 1
        return f"{table}-{self.counters[table]}"


def seed_store() -> Store:
    """Build a store holding the fixed fixture (one identity, two findings)."""
    now = utcnow_iso()
    return Store(
        auth_user={"id": SEED_AUTH_USER_ID, "email": SEED_AUTH_EMAIL},
        tables={
            "users": [
                {
                    "id": SEED_PROFILE_ID,
                    "auth_user_id": SEED_AUTH_USER_ID,
                    "email": SEED_AUTH_EMAIL,
                    "name": "Test User",
                    "plan": None,
                    "billing_status": None,
                    "stripe_customer_id": None,
                    "stripe_subscription_id": None,
                    "is_admin": False,
                    "created_at": now,
                }
            ],
            "identities": [],
            "findings": [
                {
                    "id": "finding-1",
                    "user_id": SEED_PROFILE_ID,
                    "url": "https://example.com/infringing/1",
                    "source_type": "search",
                    "status": "Found",
                    "created_at": now,
                },
                {
                    "id": "finding-2",
                    "user_id": SEED_PROFILE_ID,
                    "url": "https://example.com/infringing/2",
                    "source_type": "host",
                    "status": "Submitted",
                    "created_at": now,
                },
            ],
            "takedowns": [],
        },
        counters={"users": 1, "identities": 0, "findings": 2, "takedowns": 0},
    )


# The only module-level mutable state in the store layer.
_STORE: Store | None = None


def get_store() -> Store:
    """Return the process-wide store, seeding it on first access."""
    global _STORE
    if _STORE is None:
        _STORE = seed_store()
    return _STORE


def reset_store() -> None:
    """Replace the store with a freshly seeded one."""
    global _STORE
    _STORE = seed_store()
    logger.info("In-memory store reset to seed fixture")

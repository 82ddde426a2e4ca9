"""
Takedesk Core - Store errors.

The in-memory store raises the same exception type as postgrest-py so callers
written against the real client handle both identically.
"""

from postgrest.exceptions import APIError

# PostgREST error codes
NO_ROWS_CODE = "PGRST116"
UNDEFINED_TABLE_CODE = "42P01"


class RowNotFoundError(APIError):
    """Raised by ``single()`` when the query matched no rows."""

    def __init__(self, table: str):
        super().__init__(
            {
                "message": "No rows",
                "code": NO_ROWS_CODE,
                "hint": None,
                "details": f"The result contains 0 rows (table: {table})",
            }
        )
        self.table = table


class UnknownTableError(APIError):
    """Raised when a table outside the fixed schema is requested."""

    def __init__(self, table: str):
        super().__init__(
            {
                "message": f'relation "public.{table}" does not exist',
                "code": UNDEFINED_TABLE_CODE,
                "hint": None,
                "details": None,
            }
        )
        self.table = table

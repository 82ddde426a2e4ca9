"""Takedesk Admin Module - back-office endpoints."""

from takedesk.modules.admin.router import router

__all__ = ["router"]

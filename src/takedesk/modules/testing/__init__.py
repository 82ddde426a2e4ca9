"""Takedesk Testing Module - test-mode only endpoints."""

from takedesk.modules.testing.router import router

__all__ = ["router"]

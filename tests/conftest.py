"""Shared fixtures: every test runs in test mode against a freshly seeded store."""

import pytest

from takedesk.config import get_settings
from takedesk.core.table_store import reset_store


@pytest.fixture(autouse=True)
def _test_mode(monkeypatch):
    monkeypatch.setenv("TEST_MODE", "true")
    monkeypatch.delenv("ADMIN_EMAILS", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    for name in ("STRIPE_SECRET_KEY", "STRIPE_PUBLIC_KEY", "STRIPE_PRICE_STARTER", "STRIPE_PRICE_PRO", "SITE_URL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_store()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db():
    """Service-role in-memory client."""
    from takedesk.core.memory_client import create_memory_service_client

    return create_memory_service_client()

"""
Takedesk Configuration Module.

Handles application settings, the test-mode switch and Supabase configuration.
Uses pydantic-settings for validation and type safety.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SupabaseSettings(BaseSettings):
    """Supabase configuration for database and authentication."""

    model_config = SettingsConfigDict(env_prefix="SUPABASE_")

    url: str = Field(default="https://demo.supabase.co", description="Supabase project URL")
    anon_key: str = Field(default="demo-anon-key", description="Supabase anonymous key")
    service_role_key: str = Field(default="demo-service-role-key", description="Supabase service role key")


class StorageSettings(BaseSettings):
    """Object storage buckets."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    ids_bucket: str = Field(default="ids", description="Bucket holding identity documents")


class StripeSettings(BaseSettings):
    """Stripe subscription checkout."""

    model_config = SettingsConfigDict(env_prefix="STRIPE_")

    secret_key: str = Field(default="", description="Stripe secret API key")
    public_key: str = Field(default="", description="Stripe publishable key")
    price_starter: str = Field(default="", description="Price id of the starter plan")
    price_pro: str = Field(default="", description="Price id of the pro plan")

    def price_for(self, plan: str) -> str | None:
        return {"starter": self.price_starter, "pro": self.price_pro}.get(plan)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    app_log_level: str = "INFO"

    test_mode: bool = Field(
        default=False,
        description="If true (and not production), replace the Supabase client with the in-memory store and expose the reset endpoint.",
        validation_alias="TEST_MODE",
    )

    admin_emails: str = Field(
        default="",
        description="Comma-separated emails granted admin access in addition to users.is_admin.",
        validation_alias="ADMIN_EMAILS",
    )

    site_url: str = Field(
        default="",
        description="Public base URL used for checkout redirects.",
        validation_alias="SITE_URL",
    )

    # Nested settings
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    stripe: StripeSettings = Field(default_factory=StripeSettings)

    @model_validator(mode="after")
    def _no_test_mode_in_production(self) -> "Settings":
        if self.app_env == "production":
            self.test_mode = False
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"

    @property
    def admin_email_list(self) -> list[str]:
        """Normalized admin emails."""
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]

    @property
    def billing_configured(self) -> bool:
        """Checkout needs every Stripe key, both prices and the site URL."""
        stripe = self.stripe
        return all([stripe.secret_key, stripe.public_key, stripe.price_starter, stripe.price_pro, self.site_url])


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    stripe_secret_key: str
    cron_token: str
    environment: str = _ENVIRONMENT
    guest_monthly_limit: int = 3
    photographer_timeout_minutes: int = 10
    request_ttl_days: int = 3
    platform_fee_percent: int = 10
    accept_max_attempts: int = 3
    plan_cache_ttl_seconds: int = 300

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from permission_bridge.services.authorization import ConcurrencyMode

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    host_base_url: str
    host_token: str
    webhook_token: str
    authorization_concurrency: ConcurrencyMode = ConcurrencyMode.QUEUE
    authorization_timeout_seconds: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_timeout(raw: str | None) -> float | None:
    """Parse the authorization wait timeout from env."""
    if raw is None:
        return None
    cleaned = raw.strip().lower()
    if cleaned in {"", "0", "none"}:
        return None
    value = float(cleaned)
    if value < 0:
        raise ValueError("authorization timeout must not be negative")
    return value

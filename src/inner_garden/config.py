"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    artworks_path: Path = Path("data/artworks.json")
    admin_email: str | None = None
    admin_password: str | None = None
    admin_token: str | None = None
    admin_session_ttl_hours: float = 12
    admin_max_sessions: int = 256
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_pass: str | None = None
    stripe_secret_key: str | None = None
    stripe_success_url: str = "http://localhost:3000/?checkout=success"
    stripe_cancel_url: str = "http://localhost:3000/?checkout=cancelled"
    stripe_api_base: str = "https://api.stripe.com"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    consultation_webhook_url: str | None = None
    rate_limit_enabled: bool = True
    rate_limit_api: str = "100/15 minutes"
    rate_limit_order: str = "5/hour"
    allowed_origins: str | None = None
    environment: str = _ENVIRONMENT
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def notification_email(self) -> str | None:
        """Return the studio inbox for order and consultation emails."""
        return self.admin_email or self.smtp_user


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse CORS origins from env; empty or ``*`` allows any origin."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    origins = [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
    return origins or ["*"]

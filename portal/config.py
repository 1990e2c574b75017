"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy with service-role credentials",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify the identity provider JWT tokens",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before locally issued access tokens expire",
        gt=0,
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name (or UTC offset) used for stored timestamps",
    )
    app_url: str = Field(
        default="http://localhost:3000",
        description="Public URL of the portal, used for links in emails",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )
    default_tax_rate: float = Field(
        default=8.5,
        description="Tax rate (percent) applied to invoices created on estimate approval",
        ge=0,
    )
    invoice_due_days: int = Field(
        default=30,
        description="Number of days after creation when an invoice is due",
        gt=0,
    )
    side_effect_history_size: int = Field(
        default=100,
        description="Number of side effect outcomes kept in memory for inspection",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Loggly
    loggly_domain: str = ""
    loggly_username: str = ""
    loggly_password: str = ""
    loggly_search_query: str = "*"

    # Search window used by the scheduled trigger and slash command
    search_from: str = "-10m"
    search_until: str = "now"
    search_order: str = "asc"
    search_size: int = 50
    search_timeout: float = 10.0

    # Display time zone for event timestamps (blank or unknown -> local zone)
    location: str = ""

    # Slack
    slack_bot_token: str = ""
    slack_signing_secret: str = ""
    slack_channel: str = "#loggly"

    # Scheduler
    scheduler_secret: str = ""

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()

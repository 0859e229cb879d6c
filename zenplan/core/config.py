"""Application configuration via environment variables."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Application
    app_name: str = "ZenPlan"
    debug: bool = False
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database backing the key-value slot
    database_url: str = "sqlite:///./zenplan.db"
    storage_key: str = "zenplan_schedules"

    # Gemini daily assistant
    gemini_api_key: str = Field(
        default="", validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY")
    )
    gemini_model: str = "gemini-3-flash-preview"
    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    assistant_timeout_seconds: float = 30.0

    # 0 disables periodic refresh; the reminder is still fetched once at startup
    reminder_refresh_minutes: int = 0


settings = Settings()

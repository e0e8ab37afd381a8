"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str
    openai_model: str = "gpt-5-mini"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    storage_bucket: str = "images"
    storage_prefix: str = "images"
    signed_url_ttl_seconds: int = 3600
    users_table: str = "users"
    media_table: str = "media"
    sessions_table: str = "web_sessions"
    session_cookie_name: str = "snapcaption_session"
    session_ttl_days: int = 7
    bcrypt_rounds: int = 10
    max_upload_bytes: int = 5 * 1024 * 1024
    max_request_bytes: int = 10 * 1024 * 1024
    image_fetch_timeout_seconds: float = 20.0
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def secure_cookies(self) -> bool:
        """Only mark session cookies secure when served over HTTPS."""
        return self.environment == "production"

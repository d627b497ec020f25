from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """CLI defaults loaded from environment variables with TYPESPEC_BRIDGE_ prefix."""

    # Conversion
    namespace: str = "JsonApi"
    title: str | None = None  # falls back to the schema title, then "API"
    # OpenAPI
    server_url: str = "https://api.example.com/v1"
    server_description: str = "Production server"
    # Logging
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="TYPESPEC_BRIDGE_", env_file=".env")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()

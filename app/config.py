# app/config.py
"""
Environment-driven settings via pydantic-settings.

Values are read from environment variables (case insensitive) and an
optional ``.env`` file in the working directory.  ``get_settings`` is
cached so the environment is read once per process; tests build their
own ``Settings`` and pass it to ``create_app`` instead.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# Development-only fallback.  Anyone who knows this string can write to the
# catalogue, so create_app logs a warning whenever it is in effect.
DEFAULT_API_KEY = "your-secret-api-key-123"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    project_name: str = "Product API"
    api_version: str = "1.0.0"

    # "development" exposes stack traces in error responses
    app_env: str = "production"

    api_key: str = DEFAULT_API_KEY

    host: str = "0.0.0.0"
    port: int = 3000

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"

    @property
    def uses_default_api_key(self) -> bool:
        return self.api_key == DEFAULT_API_KEY


@lru_cache
def get_settings() -> Settings:
    return Settings()

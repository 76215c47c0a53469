from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# Development-only signing key; override with BANK_JWT_SECRET.
DEFAULT_JWT_SECRET = "change-me"


class Settings(BaseSettings):
    app_name: str = "Digital Bank API"
    app_version: str = "1.0.0"
    database_url: str = "sqlite:///digital_bank.db"
    log_level: str = "INFO"

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    list_default_limit: int = 50
    list_max_limit: int = 500

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BANK_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

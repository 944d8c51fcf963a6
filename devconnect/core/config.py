"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "devconnect"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_seconds: int = 360000  # 100 hours

    # Password hashing
    bcrypt_rounds: int = 10

    # Gravatar (s = size, r = maturity rating, d = default image)
    gravatar_size: str = "200"
    gravatar_rating: str = "pg"
    gravatar_default: str = "mm"

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    # App
    debug: bool = False

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()

"""
Client configuration — loaded from environment variables / .env file.
"""
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    LOG_LEVEL: str = "INFO"

    # Remote API
    API_URL: str = "http://localhost:5000/api"
    # Seconds per request; None waits indefinitely.
    REQUEST_TIMEOUT: Optional[float] = 90.0

    # Session cookies
    # Empty keeps the session in memory only.
    TOKEN_STORE_PATH: str = "./data/session.json"
    ACCESS_TOKEN_FALLBACK_HOURS: int = 24      # used when expiresAt is unparseable
    REFRESH_TOKEN_DAYS: int = 7
    COOKIE_PATH: str = "/"
    COOKIE_SAME_SITE: str = "Lax"

    # Tables
    TALENT_PAGE_SIZE: int = 20
    ADMIN_PAGE_SIZE: int = 20

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        return v.strip().upper()

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.version import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    APP_NAME: str = "Sixhands"
    APP_ENV: Literal["development", "production"] = "production"
    PORT: int = 8000

    # "memory" keeps records in process (optionally seeded from SEED_DATA_PATH)
    STORE_BACKEND: Literal["memory", "redis"] = "memory"
    SEED_DATA_PATH: str | None = None

    REDIS_URL: str = "redis://redis:6379/0"
    # Maximum number of connections Redis client will open per process
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_KEY_PREFIX: str = "sixhands:"
    # Concurrent per-record store reads per request; keep below REDIS_MAX_CONNECTIONS
    STORE_MAX_CONCURRENCY: int = 10


settings = Settings()

APP_VERSION = __version__

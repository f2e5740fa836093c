"""Cache settings loaded from environment / .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TABLECACHE_",
        extra="ignore",
    )

    # ── Database ──────────────────────────────────────────
    database_url: str = "sqlite:///./tablecache.db"
    create_table_on_startup: bool = False  # use Alembic in production

    # ── Expiry ────────────────────────────────────────────
    time_zone: str = "Europe/Istanbul"

    # ── Purge worker ──────────────────────────────────────
    redis_url: str = "redis://localhost:6379/0"
    purge_interval_minutes: int = 60


@lru_cache
def get_settings() -> Settings:
    return Settings()

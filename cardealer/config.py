"""Settings for the car dealer API, read from the environment or a .env file.

Invariants:
    - Env var names are the field names, case-insensitive (DATABASE_URL, LOG_LEVEL, ...)
    - database_url always names an async driver; plain postgresql:// is upgraded to asyncpg
    - get_settings() returns one cached instance per process
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ASYNC_POSTGRES = "postgresql+asyncpg://"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    app_name: str = "Car Dealer API"
    app_version: str = "1.0.0"
    api_prefix: str = "/api"
    # React frontend dev server
    cors_origins: list[str] = ["http://localhost:3000"]

    database_url: str = f"{_ASYNC_POSTGRES}cardealer:cardealer@db:5432/cardealer"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v):
        for prefix in ("postgresql://", "postgres://"):
            if isinstance(v, str) and v.startswith(prefix):
                return _ASYNC_POSTGRES + v[len(prefix):]
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults for options not given on the command line."""

    model_config = SettingsConfigDict(env_prefix="DNS_WATCH_", case_sensitive=False)

    interval: float = Field(default=1.0, gt=0)
    timeout: float = Field(default=1.0, gt=0)
    notify_first: bool = True
    file_mode: str = "0644"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class Settings(BaseSettings):
    """Runtime settings. YAML supplies defaults, SERVIS_* env vars override them."""

    database_url: str = _yaml.get("database", {}).get("url", "sqlite+aiosqlite:///data/servis.db")
    session_max_age_days: int = _yaml.get("auth", {}).get("session_max_age_days", 7)
    log_level: str = _yaml.get("logging", {}).get("level", "INFO")
    cors_origins: list[str] = Field(
        default_factory=lambda: list(_yaml.get("cors", {}).get("origins", ["http://localhost:5173"]))
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "SERVIS_"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

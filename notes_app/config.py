"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

DEFAULT_STORAGE_KEY = "@notes_app_data"


class Settings(BaseSettings):
    """Application settings loaded from .env file (``NOTES_`` prefix)."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "NOTES_",
        "extra": "ignore",
    }

    # Storage
    storage_backend: Literal["memory", "file", "redis"] = "file"
    storage_key: str = DEFAULT_STORAGE_KEY
    data_dir: Path = Path("data")

    # Redis
    redis_url: str = "redis://localhost:6379"

    # Logging
    log_level: str = "INFO"

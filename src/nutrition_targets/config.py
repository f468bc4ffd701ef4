"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_token: str
    storage_backend: Literal["file", "supabase"] = "file"
    data_dir: Path = Path(".data")
    storage_key: str = "calorie-target-storage"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "kv_store"
    default_timezone: str = "UTC"
    log_level: str = "INFO"
    initialize_default_target: bool = True
    default_target_calories: int = 2000
    default_target_protein: float | None = 150
    default_target_carbs: float | None = 200
    default_target_fats: float | None = 65
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

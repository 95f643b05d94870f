"""Settings loaded from TIRECALC_* environment variables or a .env file."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the calculator."""

    model_config = SettingsConfigDict(
        env_prefix="TIRECALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Root log level for tirecalc loggers")
    reference_path: Optional[Path] = Field(
        default=None,
        description="JSON file whose keys override the built-in reference tables",
    )
    gear_recommendations_path: Optional[Path] = Field(
        default=None,
        description="CSV of community gear-ratio builds. Falls back to the packaged sample.",
    )
    default_vehicle_weight_lbs: float = Field(
        default=4500.0,
        gt=0,
        description="Vehicle weight used by the stress scorer when none is given",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()

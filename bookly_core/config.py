"""Configuration for the booking engine core."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchedulingSettings(BaseSettings):
    """Scheduling engine settings, read from ``BOOKLY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BOOKLY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Persistence
    storage_namespace: str = Field(
        default="bookly",
        description="Prefix of every persisted state key",
    )
    state_dir: Optional[Path] = Field(
        default=None,
        description="Directory for JSON state files; in-memory when unset",
    )

    # Slot generation
    generation_horizon_days: int = Field(
        default=90,
        ge=1,
        le=730,
        description="Days generated ahead of today for open-ended templates",
    )

    # Conflict rules
    time_off_requires_approval: bool = Field(
        default=False,
        description="Only approved time off blocks bookings",
    )
    enforce_working_hours: bool = Field(
        default=False,
        description="Reject bookings outside the staff member's effective shifts",
    )

    # Calendar defaults
    default_view: str = "timeGridWeek"

    # Logging
    log_level: str = "info"
    log_format: str = "pretty"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["debug", "info", "warning", "error", "critical"]
        if v.lower() not in valid_levels:
            raise ValueError(f"log_level must be one of: {valid_levels}")
        return v.lower()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v.lower() not in ("json", "pretty"):
            raise ValueError("log_format must be 'json' or 'pretty'")
        return v.lower()

    @field_validator("default_view")
    @classmethod
    def validate_default_view(cls, v: str) -> str:
        """Validate default calendar view."""
        valid_views = ["dayGridMonth", "timeGridWeek", "timeGridDay", "listMonth"]
        if v not in valid_views:
            raise ValueError(f"default_view must be one of: {valid_views}")
        return v


@lru_cache
def get_settings() -> SchedulingSettings:
    """Get cached settings instance."""
    return SchedulingSettings()

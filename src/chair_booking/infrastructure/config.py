"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Annotated, List, Optional
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./chair_booking.db"
    database_echo: bool = False

    # Logging
    log_level: str = "INFO"
    log_to_console: bool = True
    log_to_file: bool = False
    log_dir: Optional[str] = None

    # Booking form
    business_start_hour: int = 8
    business_end_hour: int = 21
    default_duration_minutes: int = 60

    # Reminders, e.g. CHAIR_BOOKING_REMINDER_OFFSETS_MINUTES="15,5"
    reminder_offsets_minutes: Annotated[List[int], NoDecode] = [15, 5]

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("business_start_hour", "business_end_hour")
    @classmethod
    def check_hour(cls, value: int) -> int:
        """Hours must fall on the 24h clock."""
        if not 0 <= value <= 23:
            raise ValueError("Hour must be between 0 and 23")
        return value

    @field_validator("default_duration_minutes")
    @classmethod
    def check_duration(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Default duration must be positive")
        return value

    @field_validator("reminder_offsets_minutes", mode="before")
    @classmethod
    def split_offset_list(cls, value):
        """Convert comma-separated reminder offsets to a list."""
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, int):
            return [value]
        return value

    @field_validator("reminder_offsets_minutes")
    @classmethod
    def check_offsets(cls, value: List[int]) -> List[int]:
        if any(minutes <= 0 for minutes in value):
            raise ValueError("Reminder offsets must be positive minutes")
        return value

    @model_validator(mode='after')
    def check_business_hours(self):
        if self.business_start_hour > self.business_end_hour:
            raise ValueError("business_start_hour must not be after business_end_hour")
        return self

    class Config:
        """Pydantic config."""
        env_file = ".env"
        env_prefix = "CHAIR_BOOKING_"
        case_sensitive = False
        env_ignore_empty = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()

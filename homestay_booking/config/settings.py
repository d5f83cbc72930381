"""Application settings and configuration management."""
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class BookingSettings(BaseSettings):
    """Defaults applied while adapting availability results and pricing rooms."""

    fallback_nightly_price: float = 1000.0  # Used when the API price is missing or <= 0
    default_display_quantity: int = 10  # Shown when a room has no inventory limit
    low_availability_threshold: int = 3  # "Only N left" badge at or below this count
    original_price_markup: float = 1.2  # Reference price when the API sends none
    same_day_checkin_cutoff_hour: int = 14
    default_room_title: str = "Standard Room"
    default_bed_type: str = "Unknown"
    sq_ft_per_guest: int = 100

    model_config = SettingsConfigDict(env_prefix="BOOKING_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main application settings."""

    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False

    # Sub-settings
    booking: BookingSettings = BookingSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()

"""Configuration package."""

from homestay_booking.config.logging import configure_logging, get_logger
from homestay_booking.config.settings import Settings, settings

__all__ = ["settings", "Settings", "configure_logging", "get_logger"]

"""Availability search API response models."""

from homestay_booking.models.api.availability import (
    ApiExtraOption,
    ApiHomestay,
    ApiRoom,
    AvailabilityResponse,
)

__all__ = [
    "ApiExtraOption",
    "ApiRoom",
    "ApiHomestay",
    "AvailabilityResponse",
]

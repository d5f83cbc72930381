"""Input adaptation package."""

from homestay_booking.transformers.availability_transformer import (
    AvailabilityResponseError,
    AvailabilityTransformer,
    HomestayNotFoundError,
)
from homestay_booking.transformers.guest_distribution import (
    GuestDistributionError,
    GuestDistributionParser,
)
from homestay_booking.transformers.search_transformer import SearchTransformer

__all__ = [
    "AvailabilityTransformer",
    "AvailabilityResponseError",
    "HomestayNotFoundError",
    "GuestDistributionParser",
    "GuestDistributionError",
    "SearchTransformer",
]

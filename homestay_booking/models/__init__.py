"""Domain models for room selection, assignment and pricing."""

from homestay_booking.models.guests import GuestCounts, GuestGroup
from homestay_booking.models.offering import ExtraOption, HomestayCatalog, RoomOffering
from homestay_booking.models.results import MutationResult, RejectionCode
from homestay_booking.models.search import SearchContext, nights_between
from homestay_booking.models.selection import (
    BookingSnapshot,
    PriceLine,
    PriceQuote,
    RoomDraft,
    SelectionEntry,
)

__all__ = [
    "GuestCounts",
    "GuestGroup",
    "ExtraOption",
    "RoomOffering",
    "HomestayCatalog",
    "RejectionCode",
    "MutationResult",
    "SearchContext",
    "nights_between",
    "RoomDraft",
    "SelectionEntry",
    "PriceLine",
    "PriceQuote",
    "BookingSnapshot",
]

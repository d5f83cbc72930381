"""Selection, assignment and pricing services."""

from homestay_booking.services.assignment import (
    AssignmentProposal,
    AssignmentProposer,
    RoomAssignment,
    RoomSuggestion,
)
from homestay_booking.services.booking_flow import (
    BookingFlow,
    CheckoutNotReadyError,
    RoomCardView,
)
from homestay_booking.services.pricing import PricingCalculator
from homestay_booking.services.reassignment import ReassignmentSession, StagedGuests
from homestay_booking.services.selection_store import SelectionStore

__all__ = [
    "AssignmentProposal",
    "AssignmentProposer",
    "RoomAssignment",
    "RoomSuggestion",
    "BookingFlow",
    "CheckoutNotReadyError",
    "RoomCardView",
    "PricingCalculator",
    "ReassignmentSession",
    "StagedGuests",
    "SelectionStore",
]

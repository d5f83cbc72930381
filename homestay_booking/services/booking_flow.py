"""Booking-flow controller: owns the selection store for one search session."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel
from structlog import get_logger

from homestay_booking.config import settings
from homestay_booking.models.guests import GuestCounts, GuestField
from homestay_booking.models.offering import HomestayCatalog, RoomOffering
from homestay_booking.models.results import MutationResult
from homestay_booking.models.search import SearchContext
from homestay_booking.models.selection import BookingSnapshot, PriceQuote
from homestay_booking.services.assignment import AssignmentProposal, AssignmentProposer
from homestay_booking.services.pricing import PricingCalculator
from homestay_booking.services.reassignment import ReassignmentSession
from homestay_booking.services.selection_store import SelectionStore

logger = get_logger(__name__)


class CheckoutNotReadyError(ValueError):
    """Raised when reserve is requested for an invalid cart."""

    def __init__(self, issues: list[str]):
        self.issues = issues
        super().__init__("; ".join(issues))


class RoomCardView(BaseModel):
    """Everything the room card renders for one offering."""

    room_id: int
    title: str
    sleeps: int
    guests: GuestCounts
    is_suitable: bool
    selected_quantity: int
    rooms_left: int
    low_availability: bool
    refundable: bool
    selected_extra: Optional[str] = None
    stay_price: float
    nightly_price: float
    original_price: Optional[float] = None
    discount_percent: int = 0

    class Config:
        frozen = True


class BookingFlow:
    """Wires catalog, search, proposal, store and pricing together.

    The store is injectable so callers (and tests) can hand in their own;
    otherwise one is built and seeded from the assignment proposal.
    """

    def __init__(
        self,
        catalog: HomestayCatalog,
        search: SearchContext,
        store: Optional[SelectionStore] = None,
    ):
        self.catalog = catalog
        self.proposal: AssignmentProposal = AssignmentProposer.propose(
            catalog.offerings,
            search.guest_groups,
            search.required_room_count,
        )
        self.store = store or SelectionStore(catalog, search, self.proposal)
        self.logger = logger.bind(homestay=catalog.slug)

    @property
    def search(self) -> SearchContext:
        return self.store.search

    # Store operations

    def set_quantity(self, room_id: int, delta: int) -> MutationResult:
        return self.store.set_quantity(room_id, delta)

    def set_guests(self, room_id: int, field: GuestField, delta: int) -> MutationResult:
        return self.store.set_guests(room_id, field, delta)

    def set_extra(self, room_id: int, label: str) -> MutationResult:
        return self.store.set_extra(room_id, label)

    def remove_entry(self, room_id: int) -> MutationResult:
        return self.store.remove_entry(room_id)

    def clear_all(self) -> MutationResult:
        return self.store.clear_all()

    def change_dates(self, check_in: date, check_out: date) -> MutationResult:
        return self.store.set_stay_dates(check_in, check_out)

    def start_reassignment(self) -> ReassignmentSession:
        return ReassignmentSession(self.store)

    # Views

    def room_card(self, offering: RoomOffering) -> RoomCardView:
        extra = self.store.selected_extra(offering.room_id)
        return RoomCardView(
            room_id=offering.room_id,
            title=offering.title,
            sleeps=offering.sleeps,
            guests=self.store.guests_for(offering.room_id),
            is_suitable=self.store.is_suitable(offering.room_id),
            selected_quantity=self.store.quantity(offering.room_id),
            rooms_left=offering.display_quantity(),
            low_availability=offering.is_low_availability(),
            refundable=offering.refundable,
            selected_extra=extra,
            stay_price=PricingCalculator.card_price(offering, self.search.nights, extra),
            nightly_price=offering.nightly_price,
            original_price=offering.original_price,
            discount_percent=offering.discount_percent,
        )

    def room_cards(self) -> list[RoomCardView]:
        return [self.room_card(offering) for offering in self.catalog.offerings]

    def quote(self) -> PriceQuote:
        return self.store.quote()

    def search_issues(self, now: Optional[datetime] = None) -> list[str]:
        """Problems with the search itself, independent of the cart."""
        now = now or datetime.now()
        cutoff = settings.booking.same_day_checkin_cutoff_hour
        if self.search.same_day_cutoff_passed(now, cutoff):
            return [
                f"Same-day check-in is not available after {cutoff:02d}:00. "
                "Please select a future check-in date."
            ]
        return []

    def checkout_issues(self, now: Optional[datetime] = None) -> list[str]:
        return self.search_issues(now) + self.store.checkout_issues()

    def is_checkout_valid(self, now: Optional[datetime] = None) -> bool:
        return not self.checkout_issues(now)

    def snapshot(self, now: Optional[datetime] = None) -> BookingSnapshot:
        issues = self.checkout_issues(now)
        search = self.search
        return BookingSnapshot(
            homestay_slug=self.catalog.slug,
            homestay_name=self.catalog.name,
            check_in=search.check_in,
            check_out=search.check_out,
            nights=search.nights,
            required_room_count=search.required_room_count,
            entries=self.store.entries,
            quote=self.store.quote(),
            checkout_valid=not issues,
            issues=issues,
        )

    def reserve(self, now: Optional[datetime] = None) -> BookingSnapshot:
        """Hand the cart to the booking dialog.

        Raises:
            CheckoutNotReadyError: If the cart does not satisfy the search
        """
        snapshot = self.snapshot(now)
        if not snapshot.checkout_valid:
            self.logger.info("Reserve blocked", issues=snapshot.issues)
            raise CheckoutNotReadyError(snapshot.issues)

        self.logger.info(
            "Reserve requested",
            room_count=len(snapshot.entries),
            grand_total=snapshot.grand_total,
            nights=snapshot.nights,
        )
        return snapshot

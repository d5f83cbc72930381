"""Tests for the booking-flow controller over the fixture catalog."""

from datetime import date, datetime

import pytest

from homestay_booking.models import RejectionCode
from homestay_booking.services import BookingFlow, CheckoutNotReadyError, SelectionStore
from homestay_booking.transformers import SearchTransformer

BEFORE_STAY = datetime(2026, 10, 1, 9, 0)


@pytest.fixture
def flow(mountain_view_catalog):
    search = SearchTransformer.transform("2026-11-02", "2026-11-05", "2A0C,1A1C", "2")
    return BookingFlow(mountain_view_catalog, search)


class TestBookingFlow:
    """Tests for BookingFlow."""

    def test_proposal_seeds_room_cards(self, flow):
        """Test the proposer's defaults reach the cards."""
        cards = {card.room_id: card for card in flow.room_cards()}

        assert [a.room_id for a in flow.proposal.assignments] == [101, 102]
        assert cards[101].guests.total == 2
        assert cards[102].guests.children == 1
        assert cards[103].guests.total == 0
        assert cards[104].is_suitable is False
        assert all(card.selected_quantity == 0 for card in cards.values())

    def test_room_card_display_values(self, flow):
        """Test availability badges, display quantity and prices on cards."""
        cards = {card.room_id: card for card in flow.room_cards()}

        assert cards[101].low_availability is True
        assert cards[101].discount_percent == 20
        assert cards[101].selected_extra == "Room only"
        assert cards[101].stay_price == 6000
        assert cards[103].rooms_left == 10
        assert cards[103].low_availability is False
        assert cards[103].stay_price == 3000
        assert cards[104].rooms_left == 0

    def test_select_proposed_rooms_and_reserve(self, flow):
        """Test the full happy path through reserve."""
        for assignment in flow.proposal.assignments:
            assert flow.set_quantity(assignment.room_id, 1).ok
        flow.set_extra(101, "Breakfast")

        snapshot = flow.reserve(now=BEFORE_STAY)

        assert snapshot.checkout_valid is True
        assert snapshot.nights == 3
        assert snapshot.homestay_slug == "Mountain-View-Homestay"
        assert [entry.room_id for entry in snapshot.entries] == [101, 102]
        assert snapshot.grand_total == (2000 * 3 + 500 * 3) + 3500 * 3
        assert snapshot.issues == []

    def test_reserve_blocked_when_rooms_missing(self, flow):
        """Test reserve refuses an incomplete cart and says why."""
        flow.set_quantity(101, 1)

        with pytest.raises(CheckoutNotReadyError) as exc_info:
            flow.reserve(now=BEFORE_STAY)

        assert any("Select exactly 2 room" in issue for issue in exc_info.value.issues)
        assert any("child" in issue for issue in exc_info.value.issues)

    def test_same_day_checkin_after_cutoff_blocks_checkout(self, flow):
        """Test same-day bookings close at the cutoff hour."""
        for assignment in flow.proposal.assignments:
            flow.set_quantity(assignment.room_id, 1)

        assert flow.is_checkout_valid(now=datetime(2026, 11, 2, 13, 0))
        assert not flow.is_checkout_valid(now=datetime(2026, 11, 2, 15, 0))
        assert "Same-day check-in" in flow.checkout_issues(now=datetime(2026, 11, 2, 15, 0))[0]

    def test_change_dates_reprices(self, flow):
        """Test moving the stay updates nights and totals."""
        flow.set_quantity(101, 1)

        flow.change_dates(date(2026, 11, 2), date(2026, 11, 3))

        assert flow.quote().grand_total == 2000
        assert flow.room_cards()[0].stay_price == 2000

    def test_rejections_surface_codes(self, flow):
        """Test store rejections pass through the controller unchanged."""
        assert flow.set_quantity(104, 1).code == RejectionCode.UNSUITABLE_ROOM
        assert flow.set_quantity(103, 1).code == RejectionCode.EMPTY_ROOM

    def test_reassignment_through_flow(self, flow):
        """Test reassignment commits through the controller's store."""
        flow.set_quantity(101, 1)
        flow.set_quantity(102, 1)
        session = flow.start_reassignment()

        session.adjust(101, "adults", -1)
        session.adjust(102, "adults", 1)

        assert session.commit().ok
        assert flow.store.entry(102).assigned_guests.adults == 2
        assert flow.is_checkout_valid(now=BEFORE_STAY)

    def test_clear_all_resets_cards(self, flow):
        flow.set_quantity(101, 1)

        flow.clear_all()

        assert flow.snapshot(now=BEFORE_STAY).entries == []
        assert flow.room_card(flow.catalog.get(101)).selected_quantity == 0

    def test_injected_store_is_used(self, mountain_view_catalog):
        """Test a caller-provided store becomes the flow's state container."""
        search = SearchTransformer.transform("2026-11-02", "2026-11-03", "1A0C", "1")
        store = SelectionStore(mountain_view_catalog, search)

        flow = BookingFlow(mountain_view_catalog, search, store=store)
        flow.set_guests(103, "adults", 1)
        flow.set_quantity(103, 1)

        assert flow.store is store
        assert store.quantity(103) == 1

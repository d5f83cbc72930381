import json
from datetime import date
from pathlib import Path
from typing import Optional

import pytest

from homestay_booking.models import (
    ExtraOption,
    GuestGroup,
    HomestayCatalog,
    RoomOffering,
    SearchContext,
)
from homestay_booking.services import AssignmentProposer, SelectionStore
from homestay_booking.transformers import AvailabilityTransformer


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def availability_response():
    """Load availability search response from fixture."""
    with open(FIXTURES_DIR / "availability" / "availability_response.json") as f:
        return json.load(f)


@pytest.fixture
def availability_response_path():
    return FIXTURES_DIR / "availability" / "availability_response.json"


@pytest.fixture
def mountain_view_catalog(availability_response):
    """Catalog adapted from the Mountain View homestay in the fixture."""
    return AvailabilityTransformer.transform(availability_response, "mountain-view-homestay")


@pytest.fixture
def make_offering():
    """Build an offering with only the fields a test cares about."""

    def _make_offering(
        room_id: int,
        sleeps: int = 2,
        available_quantity: Optional[int] = 5,
        nightly_price: float = 2000,
        extras: Optional[list[tuple[str, float]]] = None,
        title: Optional[str] = None,
    ) -> RoomOffering:
        return RoomOffering(
            room_id=room_id,
            title=title or f"Room {room_id}",
            sleeps=sleeps,
            available_quantity=available_quantity,
            nightly_price=nightly_price,
            extras=[ExtraOption(label=label, price=price) for label, price in extras or []],
        )

    return _make_offering


@pytest.fixture
def make_catalog():
    def _make_catalog(*offerings: RoomOffering, slug: str = "test-homestay") -> HomestayCatalog:
        return HomestayCatalog(slug=slug, name="Test Homestay", offerings=list(offerings))

    return _make_catalog


@pytest.fixture
def make_search():
    """Build a three-night search for the given (adults, children) groups."""

    def _make_search(
        groups: list[tuple[int, int]],
        required_room_count: Optional[int] = None,
        check_in: date = date(2026, 11, 2),
        check_out: date = date(2026, 11, 5),
    ) -> SearchContext:
        return SearchContext(
            check_in=check_in,
            check_out=check_out,
            required_room_count=required_room_count or len(groups),
            guest_groups=[GuestGroup(adults=a, children=c) for a, c in groups],
        )

    return _make_search


@pytest.fixture
def build_store(make_catalog, make_search):
    """Build a SelectionStore seeded from the proposer's assignment."""

    def _build_store(offerings, groups, required_room_count=None, **search_kwargs):
        catalog = make_catalog(*offerings)
        search = make_search(groups, required_room_count, **search_kwargs)
        proposal = AssignmentProposer.propose(
            catalog.offerings, search.guest_groups, search.required_room_count
        )
        return SelectionStore(catalog, search, proposal)

    return _build_store

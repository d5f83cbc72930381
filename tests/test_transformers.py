"""Unit tests for input transformers."""

from datetime import date

import pytest

from homestay_booking.models import GuestGroup
from homestay_booking.models.api import ApiRoom
from homestay_booking.transformers import (
    AvailabilityResponseError,
    AvailabilityTransformer,
    GuestDistributionError,
    GuestDistributionParser,
    HomestayNotFoundError,
    SearchTransformer,
)


class TestAvailabilityTransformer:
    """Tests for AvailabilityTransformer."""

    def test_transform_finds_homestay_case_insensitively(self, availability_response):
        """Test that the slug lookup ignores case."""
        catalog = AvailabilityTransformer.transform(availability_response, "MOUNTAIN-view-homestay")

        assert catalog.slug == "Mountain-View-Homestay"
        assert catalog.name == "Mountain View Homestay"
        assert catalog.homestay_id == 7
        assert catalog.room_ids == [101, 102, 103, 104]

    def test_transform_property_metadata(self, mountain_view_catalog):
        """Test city and region come from the address parts."""
        assert mountain_view_catalog.city == "Pokhara"
        assert mountain_view_catalog.region == "Gandaki"
        assert mountain_view_catalog.features == ["Garden", "Lake View"]

    def test_transform_missing_address_parts(self, availability_response):
        """Test that short addresses fall back to unknown city and region."""
        catalog = AvailabilityTransformer.transform(availability_response, "lakeside-retreat")

        assert catalog.city == "Unknown City"
        assert catalog.region == "Unknown Region"

    def test_transform_full_room(self, mountain_view_catalog):
        """Test a fully populated room keeps its values."""
        room = mountain_view_catalog.get(101)

        assert room.title == "Deluxe Double"
        assert room.sleeps == 2
        assert room.available_quantity == 3
        assert room.nightly_price == 2000
        assert room.base_price == 2000
        assert room.original_price == 2500
        assert [extra.label for extra in room.extras] == ["Room only", "Breakfast"]
        assert room.default_extra == "Room only"
        assert room.city_view is True
        assert room.free_wifi is True
        assert room.free_parking is False
        assert room.sq_ft == 200
        assert room.refundable is True
        assert room.image_urls == ["/images/101-a.jpg", "/images/101-b.jpg"]

    def test_transform_sparse_room_uses_defaults(self, mountain_view_catalog):
        """Test defaults for a room with almost nothing filled in."""
        room = mountain_view_catalog.get(103)

        assert room.title == "Standard Room"
        assert room.sleeps == 1
        assert room.available_quantity is None
        assert room.is_unbounded
        assert room.nightly_price == 1000
        assert room.base_price == 1000
        assert room.original_price == pytest.approx(1200)
        assert room.bed_type == "Unknown"
        assert room.extras == []
        assert room.image_urls == []
        assert room.rating == 0
        assert room.sq_ft == 100

    def test_transform_default_original_price(self, mountain_view_catalog):
        """Test the reference price defaults to a markup on the nightly price."""
        assert mountain_view_catalog.get(102).original_price == pytest.approx(4200)

    def test_transform_sold_out_room(self, mountain_view_catalog):
        """Test that zero rooms left is kept, not treated as unbounded."""
        room = mountain_view_catalog.get(104)

        assert room.available_quantity == 0
        assert room.has_availability is False

    def test_transform_unknown_slug(self, availability_response):
        """Test that a missing homestay raises HomestayNotFoundError."""
        with pytest.raises(HomestayNotFoundError):
            AvailabilityTransformer.transform(availability_response, "nowhere")

    def test_transform_invalid_response(self):
        """Test that a malformed payload raises AvailabilityResponseError."""
        with pytest.raises(AvailabilityResponseError):
            AvailabilityTransformer.transform({"homestays": [{"name": "No slug"}]}, "x")

    def test_transform_room_without_id(self):
        """Test that rooms must carry an id."""
        with pytest.raises(AvailabilityResponseError, match="Room ID missing"):
            AvailabilityTransformer.transform_room(ApiRoom(name="Ghost Room"))

    def test_transform_clamps_rating_and_negative_inventory(self):
        """Test out-of-range values from the API are clamped."""
        room = AvailabilityTransformer.transform_room(
            ApiRoom(id=1, rating=7.5, roomsLeft=-2, maxOccupancy=2, nightlyPrice=900)
        )

        assert room.rating == 5.0
        assert room.available_quantity == 0


class TestGuestDistributionParser:
    """Tests for GuestDistributionParser."""

    def test_parse_multiple_rooms(self):
        """Test parsing one token per room, in order."""
        groups = GuestDistributionParser.parse("2A0C,1A1C")

        assert groups == [GuestGroup(adults=2, children=0), GuestGroup(adults=1, children=1)]
        assert [group.total for group in groups] == [2, 2]

    def test_parse_without_children_part(self):
        """Test that the children part may be omitted."""
        assert GuestDistributionParser.parse("3A") == [GuestGroup(adults=3, children=0)]

    def test_parse_tolerates_spaces_and_lowercase(self):
        """Test loose formatting from hand-edited URLs."""
        groups = GuestDistributionParser.parse(" 2a1c , 1A0C ")

        assert groups == [GuestGroup(adults=2, children=1), GuestGroup(adults=1, children=0)]

    @pytest.mark.parametrize("value", ["", None, " , ", "2X1C", "A1C", "2A1C,abc"])
    def test_parse_rejects_malformed(self, value):
        """Test malformed distributions are rejected."""
        with pytest.raises(GuestDistributionError):
            GuestDistributionParser.parse(value)

    def test_parse_rejects_room_without_adults(self):
        """Test each room needs an adult."""
        with pytest.raises(GuestDistributionError, match="at least one adult"):
            GuestDistributionParser.parse("0A2C")

    def test_format_is_inverse_of_parse(self):
        """Test formatting groups back to the query string form."""
        assert GuestDistributionParser.format(GuestDistributionParser.parse("2A0C,1A1C")) == "2A0C,1A1C"


class TestSearchTransformer:
    """Tests for SearchTransformer."""

    def test_transform_full_query(self):
        """Test a complete set of query values."""
        search = SearchTransformer.transform("2026-11-02", "2026-11-05", "2A0C,1A1C", "2")

        assert search.check_in == date(2026, 11, 2)
        assert search.check_out == date(2026, 11, 5)
        assert search.nights == 3
        assert search.required_room_count == 2
        assert search.total_adults == 3
        assert search.total_children == 1

    def test_transform_defaults_dates(self):
        """Test missing and unparseable dates default to today and tomorrow."""
        today = date(2026, 10, 18)
        search = SearchTransformer.transform(None, "not-a-date", "1A0C", today=today)

        assert search.check_in == today
        assert search.check_out == date(2026, 10, 19)
        assert search.nights == 1

    def test_transform_checkout_before_checkin_is_one_night(self):
        """Test that nights never drop below 1."""
        search = SearchTransformer.transform("2026-11-05", "2026-11-02", "1A0C")

        assert search.nights == 1

    def test_transform_accepts_datetime_strings(self):
        """Test ISO datetimes are cut down to their date."""
        search = SearchTransformer.transform("2026-11-02T00:00:00", "2026-11-04T00:00:00", "1A0C")

        assert search.nights == 2

    @pytest.mark.parametrize("rooms", [None, "", "abc", "0", -1])
    def test_transform_room_count_falls_back_to_group_count(self, rooms):
        """Test the room count defaults to one room per guest group."""
        search = SearchTransformer.transform("2026-11-02", "2026-11-03", "2A0C,1A0C,1A0C", rooms)

        assert search.required_room_count == 3

    def test_transform_propagates_guest_errors(self):
        """Test that bad guest strings are not silently replaced."""
        with pytest.raises(GuestDistributionError):
            SearchTransformer.transform("2026-11-02", "2026-11-03", "two adults")

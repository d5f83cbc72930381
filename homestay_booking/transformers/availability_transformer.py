"""Transformer for converting availability search results into a room catalog."""

from typing import Any, Optional

from pydantic import ValidationError
from structlog import get_logger

from homestay_booking.config import settings
from homestay_booking.models.api.availability import (
    ApiHomestay,
    ApiRoom,
    AvailabilityResponse,
)
from homestay_booking.models.offering import ExtraOption, HomestayCatalog, RoomOffering

logger = get_logger(__name__)

# Slugs listed in the log when a homestay is missing from a response
MAX_LOGGED_SLUGS = 10


class AvailabilityResponseError(ValueError):
    """Raised when an availability response cannot be adapted."""

    pass


class HomestayNotFoundError(LookupError):
    """Raised when the requested homestay is not in the response."""

    pass


class AvailabilityTransformer:
    """Adapts raw availability search payloads to HomestayCatalog."""

    @staticmethod
    def _address_part(address: Optional[str], index: int, default: str) -> str:
        """Pick a comma-separated address component (city is 1, region is 2)."""
        if not address:
            return default
        parts = address.split(",")
        if len(parts) <= index or not parts[index].strip():
            return default
        return parts[index].strip()

    @staticmethod
    def transform_room(room: ApiRoom, homestay_slug: str = "") -> RoomOffering:
        """Convert one API room into a RoomOffering.

        Args:
            room: Room record from the availability response
            homestay_slug: Owning homestay, for log context

        Returns:
            RoomOffering with defaults applied

        Raises:
            AvailabilityResponseError: If the room has no id
        """
        booking = settings.booking

        if not room.id:
            logger.error("Room id missing", homestay=homestay_slug, room_name=room.name)
            raise AvailabilityResponseError(f"Room ID missing for room: {room.name}")

        nightly_price = room.nightly_price
        if nightly_price is None or nightly_price <= 0:
            logger.warning(
                "Room has no usable nightly price, using fallback",
                homestay=homestay_slug,
                room_id=room.id,
                nightly_price=nightly_price,
                fallback=booking.fallback_nightly_price,
            )
            nightly_price = booking.fallback_nightly_price

        base_price = room.total_price if room.total_price and room.total_price > 0 else nightly_price
        original_price = room.original_price or nightly_price * booking.original_price_markup
        rating = min(max(room.rating or 0.0, 0.0), 5.0)
        max_occupancy = room.max_occupancy or 0

        rooms_left = room.rooms_left
        if rooms_left is not None and rooms_left < 0:
            rooms_left = 0

        return RoomOffering(
            room_id=room.id,
            title=room.name or booking.default_room_title,
            sleeps=max(max_occupancy, 1),
            available_quantity=rooms_left,
            nightly_price=nightly_price,
            base_price=base_price,
            original_price=original_price,
            extras=[
                ExtraOption(label=option.label, price=max(option.price, 0.0))
                for option in room.extras_options
            ],
            rating=rating,
            reviews=max(room.reviews or 0, 0),
            refundable=bool(room.refundable),
            facilities=frozenset(room.facilities or []),
            image_urls=list(room.image_urls or []),
            bed_type=room.bed_type or booking.default_bed_type,
            sq_ft=max_occupancy * booking.sq_ft_per_guest if max_occupancy else booking.sq_ft_per_guest,
        )

    @staticmethod
    def transform_homestay(homestay: dict[str, Any] | ApiHomestay) -> HomestayCatalog:
        """Convert one homestay record into a catalog, keeping room order.

        Args:
            homestay: Homestay record (dict or ApiHomestay model)

        Returns:
            HomestayCatalog

        Raises:
            AvailabilityResponseError: If the record is malformed
        """
        if isinstance(homestay, dict):
            try:
                homestay = ApiHomestay(**homestay)
            except ValidationError as e:
                logger.error("Failed to parse homestay record", error=str(e))
                raise AvailabilityResponseError(
                    f"Invalid homestay record format: {str(e)}"
                ) from e

        offerings = [
            AvailabilityTransformer.transform_room(room, homestay.slug)
            for room in homestay.rooms
        ]

        logger.info(
            "Adapted homestay rooms",
            homestay=homestay.slug,
            room_count=len(offerings),
        )

        return HomestayCatalog(
            homestay_id=homestay.id,
            slug=homestay.slug,
            name=homestay.name or "Unknown Homestay",
            address=homestay.address or "Unknown Address",
            city=AvailabilityTransformer._address_part(homestay.address, 1, "Unknown City"),
            region=AvailabilityTransformer._address_part(homestay.address, 2, "Unknown Region"),
            about=homestay.about_description or "",
            image=homestay.image_src,
            rating=homestay.rating or 0.0,
            features=list(homestay.features or []),
            vip_access=bool(homestay.vip_access),
            offerings=offerings,
        )

    @staticmethod
    def transform(
        response: dict[str, Any] | AvailabilityResponse,
        slug: str,
    ) -> HomestayCatalog:
        """Find one homestay in an availability response and adapt it.

        Args:
            response: Availability search response (dict or model)
            slug: Homestay slug, compared case-insensitively

        Returns:
            HomestayCatalog for the homestay

        Raises:
            AvailabilityResponseError: If the response is malformed
            HomestayNotFoundError: If no homestay matches ``slug``
        """
        if isinstance(response, dict):
            try:
                response = AvailabilityResponse(**response)
            except ValidationError as e:
                logger.error("Failed to parse availability response", error=str(e))
                raise AvailabilityResponseError(
                    f"Invalid availability response format: {str(e)}"
                ) from e

        homestay = response.find_by_slug(slug)
        if homestay is None:
            available = [h.slug for h in response.homestays][:MAX_LOGGED_SLUGS]
            logger.error(
                "Homestay not found in availability response",
                slug=slug,
                available_slugs=available,
            )
            raise HomestayNotFoundError(f"Homestay not found in response: {slug}")

        return AvailabilityTransformer.transform_homestay(homestay)

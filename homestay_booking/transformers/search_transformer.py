"""Builds a SearchContext from raw page query parameters."""

from datetime import date, timedelta
from typing import Optional

from structlog import get_logger

from homestay_booking.models.search import SearchContext
from homestay_booking.transformers.guest_distribution import GuestDistributionParser

logger = get_logger(__name__)


class SearchTransformer:
    """Parses check-in/out, rooms and guests query values."""

    @staticmethod
    def parse_date(value: Optional[str]) -> Optional[date]:
        """Parse an ISO date (or datetime) string, None when absent or invalid."""
        if not value:
            return None
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            logger.warning("Unparseable stay date, using default", value=value)
            return None

    @staticmethod
    def parse_room_count(value: Optional[str | int], fallback: int) -> int:
        """Parse the required room count, falling back when missing or < 1."""
        if value is None or value == "":
            return fallback
        try:
            count = int(value)
        except (TypeError, ValueError):
            logger.warning("Unparseable room count, using default", value=value, fallback=fallback)
            return fallback
        return count if count >= 1 else fallback

    @staticmethod
    def transform(
        check_in: Optional[str],
        check_out: Optional[str],
        guests: Optional[str],
        rooms: Optional[str | int] = None,
        today: Optional[date] = None,
    ) -> SearchContext:
        """Build the search context.

        Missing or unparseable check-in defaults to today; check-out defaults
        to the day after check-in. The room count defaults to the number of
        guest groups.

        Args:
            check_in: ISO check-in date
            check_out: ISO check-out date
            guests: Compact guest distribution, e.g. ``"2A0C,1A1C"``
            rooms: Required room count
            today: Reference date for defaults (tests pin this)

        Returns:
            SearchContext

        Raises:
            GuestDistributionError: If ``guests`` cannot be parsed
        """
        today = today or date.today()
        groups = GuestDistributionParser.parse(guests)

        start = SearchTransformer.parse_date(check_in) or today
        end = SearchTransformer.parse_date(check_out) or start + timedelta(days=1)
        required = SearchTransformer.parse_room_count(rooms, fallback=len(groups))

        if required != len(groups):
            logger.info(
                "Room count differs from guest groups",
                required_room_count=required,
                group_count=len(groups),
            )

        return SearchContext(
            check_in=start,
            check_out=end,
            required_room_count=required,
            guest_groups=groups,
        )

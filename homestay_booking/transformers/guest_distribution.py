"""Parser for the compact guest-distribution query parameter."""

import re
from typing import Optional

from structlog import get_logger

from homestay_booking.models.guests import GuestGroup

logger = get_logger(__name__)

# "2A1C": 2 adults, 1 child. The children part may be omitted ("2A").
GUEST_TOKEN_PATTERN = re.compile(r"^(\d+)A(?:(\d+)C?)?$", re.IGNORECASE)
GUEST_TOKEN_SEPARATOR = ","


class GuestDistributionError(ValueError):
    """Raised when the guest-distribution string cannot be parsed."""

    pass


class GuestDistributionParser:
    """Turns ``"2A0C,1A1C"`` into an ordered list of guest groups."""

    @staticmethod
    def parse_token(token: str) -> GuestGroup:
        """Parse a single ``<adults>A<children>C`` token.

        Args:
            token: One room's guests, e.g. ``"2A1C"``

        Returns:
            GuestGroup for the token

        Raises:
            GuestDistributionError: If the token is malformed or has no adult
        """
        match = GUEST_TOKEN_PATTERN.match(token.strip())
        if not match:
            raise GuestDistributionError(f"Malformed guest token: {token!r}")

        adults = int(match.group(1))
        children = int(match.group(2) or 0)
        if adults < 1:
            raise GuestDistributionError(
                f"Each room needs at least one adult, got {token!r}"
            )
        return GuestGroup(adults=adults, children=children)

    @staticmethod
    def parse(guests: Optional[str]) -> list[GuestGroup]:
        """Parse the full distribution string, one token per requested room.

        Args:
            guests: Comma-separated tokens as found in the query string

        Returns:
            Guest groups in request order

        Raises:
            GuestDistributionError: If the string is empty or any token is invalid
        """
        if not guests or not guests.strip():
            raise GuestDistributionError("Guest distribution is empty")

        groups = []
        for token in guests.split(GUEST_TOKEN_SEPARATOR):
            if not token.strip():
                continue
            try:
                groups.append(GuestDistributionParser.parse_token(token))
            except GuestDistributionError as e:
                logger.warning("Invalid guest token", token=token, error=str(e))
                raise

        if not groups:
            raise GuestDistributionError("Guest distribution is empty")

        logger.debug("Parsed guest distribution", guests=guests, group_count=len(groups))
        return groups

    @staticmethod
    def format(groups: list[GuestGroup]) -> str:
        """Inverse of ``parse``."""
        return GUEST_TOKEN_SEPARATOR.join(group.to_token() for group in groups)

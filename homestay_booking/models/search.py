"""Search request context: stay dates, rooms wanted and guest distribution."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from homestay_booking.models.guests import GuestGroup


def nights_between(check_in: Optional[date], check_out: Optional[date]) -> int:
    """Number of nights charged for a stay, never less than 1."""
    if check_in is None or check_out is None:
        return 1
    return max(1, (check_out - check_in).days)


class SearchContext(BaseModel):
    """What the guest searched for.

    ``guest_groups`` holds one entry per requested room in search order;
    their sums are the guest totals a checkout must match.
    """

    check_in: date
    check_out: date
    required_room_count: int = Field(ge=1)
    guest_groups: list[GuestGroup] = Field(min_length=1)

    class Config:
        frozen = True

    @property
    def nights(self) -> int:
        return nights_between(self.check_in, self.check_out)

    @property
    def total_adults(self) -> int:
        return sum(group.adults for group in self.guest_groups)

    @property
    def total_children(self) -> int:
        return sum(group.children for group in self.guest_groups)

    @property
    def guests_token(self) -> str:
        return ",".join(group.to_token() for group in self.guest_groups)

    def with_dates(self, check_in: date, check_out: date) -> "SearchContext":
        return self.model_copy(update={"check_in": check_in, "check_out": check_out})

    def same_day_cutoff_passed(self, now: datetime, cutoff_hour: int) -> bool:
        """True for a check-in today when the clock is past the cutoff hour."""
        return self.check_in == now.date() and now.hour >= cutoff_hour

"""Guest count value objects."""

from typing import Literal

from pydantic import BaseModel, Field

GuestField = Literal["adults", "children"]


class GuestCounts(BaseModel):
    """Adults and children held by one room.

    Zero adults is allowed here so an offering nobody was assigned to can
    start empty; holding a selected room requires at least one adult.
    """

    adults: int = Field(default=0, ge=0)
    children: int = Field(default=0, ge=0)

    class Config:
        frozen = True

    @property
    def total(self) -> int:
        return self.adults + self.children

    def adjusted(self, field: GuestField, delta: int) -> "GuestCounts":
        """Return a copy with one field moved by ``delta``.

        Adults never drop below 1 and children never below 0, matching the
        steppers on the room card. A decrement never raises a count, so an
        empty draft stays at zero adults.
        """
        if field == "adults":
            adults = self.adults + delta
            if adults < 1:
                adults = min(1, self.adults)
            return GuestCounts(adults=adults, children=self.children)
        if field == "children":
            return GuestCounts(adults=self.adults, children=max(0, self.children + delta))
        raise ValueError(f"Unknown guest field: {field}")

    def to_token(self) -> str:
        """Render in the compact search form, e.g. ``2A1C``."""
        return f"{self.adults}A{self.children}C"


class GuestGroup(GuestCounts):
    """One requested room's worth of travelers from the search request."""

    adults: int = Field(ge=1)
    children: int = Field(default=0, ge=0)

    def as_counts(self) -> GuestCounts:
        return GuestCounts(adults=self.adults, children=self.children)

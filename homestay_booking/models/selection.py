"""Selection (cart) records and the checkout hand-off snapshot."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from homestay_booking.models.guests import GuestCounts


class RoomDraft(BaseModel):
    """Card-level state for an offering that is not committed to the cart.

    Holds the guests the card currently shows and the chosen extra. Seeded
    from the assignment proposal and edited freely before selection.
    """

    room_id: int
    guests: GuestCounts = Field(default_factory=GuestCounts)
    selected_extra: Optional[str] = None

    class Config:
        frozen = True


class SelectionEntry(BaseModel):
    """Cart line binding a room to its assigned guests and quantity.

    Price and capacity are copied from the offering when the room is first
    selected; later catalog changes do not reach an existing entry.
    """

    room_id: int
    room_title: str
    assigned_guests: GuestCounts
    quantity: int = Field(ge=0)
    nightly_price: float
    unit_total_price: float = Field(description="nightly_price x nights, before quantity")
    sleeps: int = Field(ge=1)
    extra_label: Optional[str] = None
    extra_price: float = 0.0

    class Config:
        frozen = True


class PriceLine(BaseModel):
    """Priced cart line."""

    room_id: int
    room_title: str
    nightly_price: float
    extra_label: Optional[str] = None
    extra_price: float = 0.0
    nights: int
    quantity: int
    line_total: float

    class Config:
        frozen = True


class PriceQuote(BaseModel):
    """All priced lines plus the grand total."""

    nights: int
    lines: list[PriceLine] = Field(default_factory=list)
    grand_total: float = 0.0

    class Config:
        frozen = True


class BookingSnapshot(BaseModel):
    """Read-only view of the cart handed to the reserve action."""

    homestay_slug: str
    homestay_name: str
    check_in: date
    check_out: date
    nights: int
    required_room_count: int
    entries: list[SelectionEntry] = Field(default_factory=list)
    quote: PriceQuote
    checkout_valid: bool
    issues: list[str] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def grand_total(self) -> float:
        return self.quote.grand_total

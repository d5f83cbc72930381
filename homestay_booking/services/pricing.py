"""Pure pricing of cart lines."""

from typing import Iterable, Optional

from homestay_booking.models.offering import RoomOffering
from homestay_booking.models.selection import PriceLine, PriceQuote, SelectionEntry


class PricingCalculator:
    """Computes line and grand totals from snapshotted entry prices.

    ``line_total = (nightly_price * nights + extra_price * nights) * quantity``.
    Reference (struck-through) prices never enter a total.
    """

    @staticmethod
    def unit_stay_price(nightly_price: float, nights: int, extra_price: float = 0.0) -> float:
        """Price of one room for the whole stay, extra included."""
        return nightly_price * nights + extra_price * nights

    @staticmethod
    def line_total(
        nightly_price: float,
        nights: int,
        quantity: int,
        extra_price: float = 0.0,
    ) -> float:
        return PricingCalculator.unit_stay_price(nightly_price, nights, extra_price) * quantity

    @staticmethod
    def price_entry(entry: SelectionEntry, nights: int) -> PriceLine:
        return PriceLine(
            room_id=entry.room_id,
            room_title=entry.room_title,
            nightly_price=entry.nightly_price,
            extra_label=entry.extra_label,
            extra_price=entry.extra_price,
            nights=nights,
            quantity=entry.quantity,
            line_total=PricingCalculator.line_total(
                entry.nightly_price, nights, entry.quantity, entry.extra_price
            ),
        )

    @staticmethod
    def quote(entries: Iterable[SelectionEntry], nights: int) -> PriceQuote:
        """Price every entry with a positive quantity and sum the lines."""
        lines = [
            PricingCalculator.price_entry(entry, nights)
            for entry in entries
            if entry.quantity > 0
        ]
        return PriceQuote(
            nights=nights,
            lines=lines,
            grand_total=sum(line.line_total for line in lines),
        )

    @staticmethod
    def card_price(
        offering: RoomOffering,
        nights: int,
        extra_label: Optional[str] = None,
    ) -> float:
        """Per-room stay price shown on an offering's card."""
        return PricingCalculator.unit_stay_price(
            offering.nightly_price, nights, offering.extra_price(extra_label)
        )

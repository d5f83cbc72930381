"""Room offerings of one homestay as produced by an availability search."""

from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from homestay_booking.config.settings import settings


class ExtraOption(BaseModel):
    """Add-on priced per night on top of the room rate."""

    label: str
    price: float = Field(default=0.0, ge=0)

    class Config:
        frozen = True


class RoomOffering(BaseModel):
    """One bookable room type.

    Offerings are read-only for the lifetime of a search result set. The
    selection store copies the attributes it needs when a room is picked.
    """

    room_id: int
    title: str
    sleeps: int = Field(ge=1, description="Maximum guests per room")
    available_quantity: Optional[int] = Field(
        None, ge=0, description="Rooms left; None means no inventory limit"
    )
    nightly_price: float = Field(gt=0)
    base_price: float = Field(gt=0)
    original_price: Optional[float] = Field(
        None, description="Reference price shown struck through; never charged"
    )
    extras: list[ExtraOption] = Field(default_factory=list)
    rating: float = Field(default=0.0, ge=0, le=5)
    reviews: int = Field(default=0, ge=0)
    refundable: bool = False
    facilities: frozenset[str] = Field(default_factory=frozenset)
    image_urls: list[str] = Field(default_factory=list)
    bed_type: str = "Unknown"
    sq_ft: int = Field(default=0, ge=0)

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def apply_price_fallbacks(cls, data: Any) -> Any:
        """Substitute the fallback nightly price and default the base price."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        nightly = data.get("nightly_price")
        if nightly is None or nightly <= 0:
            nightly = settings.booking.fallback_nightly_price
        data["nightly_price"] = nightly
        base = data.get("base_price")
        if base is None or base <= 0:
            data["base_price"] = nightly
        return data

    @property
    def is_unbounded(self) -> bool:
        return self.available_quantity is None

    @property
    def has_availability(self) -> bool:
        return self.available_quantity is None or self.available_quantity > 0

    @property
    def default_extra(self) -> Optional[str]:
        """Label of the extra selected until the guest picks another."""
        return self.extras[0].label if self.extras else None

    @property
    def city_view(self) -> bool:
        return "City View" in self.facilities

    @property
    def free_parking(self) -> bool:
        return "Free Parking" in self.facilities

    @property
    def free_wifi(self) -> bool:
        return "Free Wifi" in self.facilities

    def quantity_cap(self, requested: int) -> int:
        """Clamp a requested quantity to what the inventory allows."""
        if self.available_quantity is None:
            return max(0, requested)
        return max(0, min(requested, self.available_quantity))

    def display_quantity(self, default: Optional[int] = None) -> int:
        """Rooms-left value shown on the card, finite even when unbounded."""
        if self.available_quantity is not None:
            return self.available_quantity
        if default is None:
            default = settings.booking.default_display_quantity
        return default

    def has_extra(self, label: str) -> bool:
        return any(extra.label == label for extra in self.extras)

    def extra_price(self, label: Optional[str]) -> float:
        """Per-night price of the extra, 0 for no extra or an unknown label."""
        for extra in self.extras:
            if extra.label == label:
                return extra.price
        return 0.0

    def is_suitable_for(self, guest_total: int) -> bool:
        """True when the room sleeps ``guest_total`` and is not sold out."""
        return self.sleeps >= guest_total and self.has_availability

    def is_low_availability(self, threshold: Optional[int] = None) -> bool:
        if threshold is None:
            threshold = settings.booking.low_availability_threshold
        return self.available_quantity is not None and 0 < self.available_quantity <= threshold

    @property
    def discount_percent(self) -> int:
        """Whole-percent saving versus the reference price, 0 when none."""
        if not self.original_price or self.original_price <= self.nightly_price:
            return 0
        return round((1 - self.nightly_price / self.original_price) * 100)


class HomestayCatalog(BaseModel):
    """Property metadata plus its ordered room offerings."""

    homestay_id: Optional[int] = None
    slug: str
    name: str
    address: str = ""
    city: str = ""
    region: str = ""
    about: str = ""
    image: Optional[str] = None
    rating: float = 0.0
    features: list[str] = Field(default_factory=list)
    vip_access: bool = False
    offerings: list[RoomOffering] = Field(default_factory=list)

    class Config:
        frozen = True

    def get(self, room_id: int) -> Optional[RoomOffering]:
        for offering in self.offerings:
            if offering.room_id == room_id:
                return offering
        return None

    @property
    def room_ids(self) -> list[int]:
        return [offering.room_id for offering in self.offerings]

"""Pydantic models for the check-availability search response."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ApiExtraOption(BaseModel):
    """Optional add-on offered with a room (breakfast, half board, ...)."""

    label: str
    price: float = 0.0

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v):
        """Treat missing prices as included."""
        if v is None:
            return 0.0
        return v

    class Config:
        extra = "allow"


class ApiRoom(BaseModel):
    """Room type as returned inside a homestay availability record."""

    id: Optional[int] = None
    name: Optional[str] = None
    image_urls: Optional[list[str]] = Field(None, alias="imageUrls")
    rating: Optional[float] = None
    reviews: Optional[int] = None
    facilities: Optional[list[str]] = None
    bed_type: Optional[str] = Field(None, alias="bedType")
    refundable: Optional[bool] = None
    nightly_price: Optional[float] = Field(None, alias="nightlyPrice")
    total_price: Optional[float] = Field(None, alias="totalPrice")
    original_price: Optional[float] = Field(None, alias="originalPrice")
    extras_options: list[ApiExtraOption] = Field(
        default_factory=list, alias="extrasOptions"
    )
    rooms_left: Optional[int] = Field(None, alias="roomsLeft")
    max_occupancy: Optional[int] = Field(None, alias="maxOccupancy")

    @field_validator("extras_options", mode="before")
    @classmethod
    def parse_extras(cls, v):
        """Accept null extras lists."""
        return v or []

    class Config:
        extra = "allow"
        populate_by_name = True


class ApiHomestay(BaseModel):
    """Homestay record from the availability search."""

    id: Optional[int] = None
    name: Optional[str] = None
    slug: str
    address: Optional[str] = None
    about_description: Optional[str] = Field(None, alias="aboutDescription")
    image_src: Optional[str] = Field(None, alias="imageSrc")
    total_price: Optional[float] = Field(None, alias="totalPrice")
    rating: Optional[float] = None
    features: Optional[list[str]] = None
    vip_access: Optional[bool] = Field(None, alias="vipAccess")
    rooms: list[ApiRoom] = Field(default_factory=list)

    class Config:
        extra = "allow"
        populate_by_name = True


class AvailabilityResponse(BaseModel):
    """Top-level availability search response."""

    homestays: list[ApiHomestay] = Field(default_factory=list)
    total: Optional[int] = None
    page: Optional[int] = None
    limit: Optional[int] = None

    class Config:
        extra = "allow"
        populate_by_name = True

    def find_by_slug(self, slug: str) -> Optional[ApiHomestay]:
        """Return the homestay whose slug matches, ignoring case."""
        wanted = slug.lower()
        for homestay in self.homestays:
            if homestay.slug.lower() == wanted:
                return homestay
        return None

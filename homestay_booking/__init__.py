"""Room selection, guest assignment and pricing engine for homestay bookings."""

__version__ = "0.1.0"

"""MongoDB document models for TinyHouse.

Each model maps to one collection (``listings``, ``users``, ``bookings``);
``Viewer`` is an in-memory projection of ``User``.
"""

from tinyhouse.models.booking import Booking
from tinyhouse.models.listing import BookingsIndex, Listing, ListingType
from tinyhouse.models.user import User
from tinyhouse.models.viewer import Viewer

__all__ = [
    "Booking",
    "BookingsIndex",
    "Listing",
    "ListingType",
    "User",
    "Viewer",
]

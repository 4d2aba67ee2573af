"""Listing document: a bookable property owned by a single host."""

from enum import Enum

from bson import ObjectId
from pydantic import Field

from tinyhouse.models.base import Document

# year -> month (zero-based) -> day -> booked
BookingsIndex = dict[str, dict[str, dict[str, bool]]]


class ListingType(str, Enum):
    APARTMENT = "APARTMENT"
    HOUSE = "HOUSE"


class Listing(Document):
    """A house or apartment offered by a host."""

    id: ObjectId = Field(alias="_id")
    title: str
    description: str
    image: str
    host: str  # users._id of the owner
    type: ListingType
    address: str
    country: str
    admin: str
    city: str
    bookings: list[ObjectId] = Field(default_factory=list)
    bookings_index: BookingsIndex = Field(default_factory=dict)
    price: int
    num_of_guests: int

    def __repr__(self) -> str:
        return f"<Listing(id={self.id}, title={self.title!r}, host={self.host!r})>"

"""Booking document: a tenant's stay at a listing."""

from bson import ObjectId
from pydantic import Field

from tinyhouse.models.base import Document


class Booking(Document):
    """A reservation of a listing by a tenant for an inclusive date range."""

    id: ObjectId = Field(alias="_id")
    listing: ObjectId
    tenant: str  # users._id
    check_in: str
    check_out: str

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, listing={self.listing}, tenant={self.tenant!r})>"

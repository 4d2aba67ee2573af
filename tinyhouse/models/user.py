"""User document: profile, session token, wallet and owned references."""

from bson import ObjectId
from pydantic import Field

from tinyhouse.models.base import Document


class User(Document):
    """A signed-in person; ids come from the Google account, not ObjectId."""

    id: str = Field(alias="_id")
    token: str
    name: str
    avatar: str
    contact: str
    wallet_id: str | None = None
    income: int = 0
    bookings: list[ObjectId] = Field(default_factory=list)
    listings: list[ObjectId] = Field(default_factory=list)

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, name={self.name!r})>"

"""Pydantic v2 schema for the hostListing mutation input."""

from pydantic import BaseModel, field_validator

from tinyhouse.models.listing import ListingType

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 5000


class HostListingCreate(BaseModel):
    """Schema for creating a new listing."""

    title: str
    description: str
    image: str  # base64 data URI, uploaded to the image host
    type: str
    address: str
    price: int
    num_of_guests: int

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        if len(value) > TITLE_MAX_LENGTH:
            raise ValueError(f"listing title must be under {TITLE_MAX_LENGTH} characters")
        return value

    @field_validator("description")
    @classmethod
    def check_description(cls, value: str) -> str:
        if len(value) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(f"listing description must be under {DESCRIPTION_MAX_LENGTH} characters")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def check_type(cls, value: object) -> str:
        if isinstance(value, ListingType):
            return value.value
        if value not in (ListingType.APARTMENT.value, ListingType.HOUSE.value):
            raise ValueError("listing type must be either apartment or house")
        return value

    @field_validator("price")
    @classmethod
    def check_price(cls, value: int) -> int:
        if value < 0:
            raise ValueError("price must be greater than 0")
        return value

"""Pydantic v2 schema for the createBooking mutation input."""

from datetime import date

from pydantic import BaseModel, model_validator


class BookingCreate(BaseModel):
    """Schema for booking a listing over an inclusive date range."""

    id: str  # listing id
    source: str  # Stripe payment source from the client
    check_in: date
    check_out: date

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        """Validate that check_out is not before check_in (a one-night stay has equal dates)."""
        if self.check_out < self.check_in:
            raise ValueError("check out date can't be before check in date")
        return self

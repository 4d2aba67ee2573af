"""Booking service: the createBooking mutation and booking lookups."""

import copy
import logging
from dataclasses import dataclass
from datetime import date, timedelta

from bson import ObjectId
from pydantic import ValidationError

from tinyhouse.billing.stripe_client import charge
from tinyhouse.database import Database, find_page, parse_object_id
from tinyhouse.errors import InvalidInputError, NotAuthorizedError, NotFoundError
from tinyhouse.models.booking import Booking
from tinyhouse.models.listing import BookingsIndex, Listing
from tinyhouse.models.user import User
from tinyhouse.schemas import as_invalid_input
from tinyhouse.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)

MAX_DAYS_AHEAD = 90


@dataclass(frozen=True)
class BookingsPage:
    total: int
    result: list[Booking]


def resolve_bookings_index(bookings_index: BookingsIndex, check_in: date, check_out: date) -> BookingsIndex:
    """Return a copy of ``bookings_index`` with every day from check-in to check-out marked.

    Months are zero-based to match the web client's calendar.

    Raises:
        InvalidInputError: If any day in the range is already booked.
    """
    new_index = copy.deepcopy(bookings_index)
    day = check_in
    while day <= check_out:
        days = new_index.setdefault(str(day.year), {}).setdefault(str(day.month - 1), {})
        if days.get(str(day.day)):
            raise InvalidInputError("selected dates can't overlap dates that have already been booked")
        days[str(day.day)] = True
        day += timedelta(days=1)
    return new_index


async def create_booking(
    db: Database,
    viewer: User | None,
    data: dict,
    today: date | None = None,
) -> Booking:
    """Charge the tenant, record the booking and update host, tenant and listing.

    Validates that:
    - The viewer is logged in and is not the listing's host.
    - Both dates are within ``MAX_DAYS_AHEAD`` days and check-out is not before check-in.
    - No requested day is already booked.
    - The host has connected a Stripe wallet.
    """
    try:
        booking_input = BookingCreate.model_validate(data)
    except ValidationError as exc:
        raise as_invalid_input(exc) from exc

    if viewer is None:
        raise NotAuthorizedError("viewer cannot be found")

    doc = await db.listings.find_one({"_id": parse_object_id(booking_input.id)})
    if doc is None:
        raise NotFoundError("listing can't be found")
    listing = Listing.model_validate(doc)

    if listing.host == viewer.id:
        raise NotAuthorizedError("viewer can't book own listing")

    latest = (today or date.today()) + timedelta(days=MAX_DAYS_AHEAD)
    if booking_input.check_in > latest:
        raise InvalidInputError(f"check in date can't be more than {MAX_DAYS_AHEAD} days from today")
    if booking_input.check_out > latest:
        raise InvalidInputError(f"check out date can't be more than {MAX_DAYS_AHEAD} days from today")

    bookings_index = resolve_bookings_index(
        listing.bookings_index, booking_input.check_in, booking_input.check_out
    )
    days = (booking_input.check_out - booking_input.check_in).days + 1
    total_price = listing.price * days

    host_doc = await db.users.find_one({"_id": listing.host})
    host = User.model_validate(host_doc) if host_doc is not None else None
    if host is None or not host.wallet_id:
        raise NotFoundError("the host either can't be found or is not connected with Stripe")

    await charge(total_price, booking_input.source, host.wallet_id)

    booking = Booking(
        id=ObjectId(),
        listing=listing.id,
        tenant=viewer.id,
        check_in=booking_input.check_in.isoformat(),
        check_out=booking_input.check_out.isoformat(),
    )
    await db.bookings.insert_one(booking.to_mongo())
    await db.users.update_one({"_id": host.id}, {"$inc": {"income": total_price}})
    await db.users.update_one({"_id": viewer.id}, {"$push": {"bookings": booking.id}})
    await db.listings.update_one(
        {"_id": listing.id},
        {"$set": {"bookingsIndex": bookings_index}, "$push": {"bookings": booking.id}},
    )

    logger.info(
        "User %s booked listing %s from %s to %s for %s",
        viewer.id,
        listing.id,
        booking.check_in,
        booking.check_out,
        total_price,
    )
    return booking


async def bookings_by_ids(db: Database, ids: list[ObjectId], *, limit: int, page: int) -> BookingsPage:
    total, documents = await find_page(db.bookings, {"_id": {"$in": ids}}, limit=limit, page=page)
    return BookingsPage(total=total, result=[Booking.model_validate(doc) for doc in documents])

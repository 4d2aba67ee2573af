"""The createBooking mutation."""

import dataclasses

from tinyhouse.auth.viewer import authorize
from tinyhouse.graphql.context import Info
from tinyhouse.graphql.errors import operation_errors
from tinyhouse.graphql.inputs import CreateBookingInput
from tinyhouse.graphql.types import Booking
from tinyhouse.services import booking_service


async def resolve_create_booking(info: Info, input: CreateBookingInput) -> Booking:
    with operation_errors("create a booking"):
        viewer = await authorize(info.context.db, info.context.request)
        booking = await booking_service.create_booking(info.context.db, viewer, dataclasses.asdict(input))
    return Booking.from_document(booking)

"""GraphQL input types for mutations."""

import strawberry

from tinyhouse.graphql.types import ListingType


@strawberry.input
class LogInInput:
    code: str


@strawberry.input
class ConnectStripeInput:
    code: str


@strawberry.input
class HostListingInput:
    title: str
    description: str
    image: str
    type: ListingType
    address: str
    price: int
    num_of_guests: int


@strawberry.input
class CreateBookingInput:
    id: strawberry.ID
    source: str
    check_in: str
    check_out: str

"""GraphQL object types.

Each type wraps the stored document in a ``Private`` field so nested resolvers
can reach references the schema does not expose. ``authorized`` is likewise
private: it says whether the current viewer owns the object and exists only
for the response being built.
"""

import json
from typing import Annotated, Optional, Union

import strawberry

from tinyhouse import models
from tinyhouse.graphql.context import Info
from tinyhouse.graphql.errors import operation_errors
from tinyhouse.services import booking_service, listing_service, user_service
from tinyhouse.services.autocomplete_service import AddressMatches, AutoCompleteMatch, CityMatches
from tinyhouse.services.listing_service import ListingsPage

ListingType = strawberry.enum(models.ListingType)
ListingsFilter = strawberry.enum(listing_service.ListingsFilter)


@strawberry.type
class Listing:
    id: strawberry.ID
    title: str
    description: str
    image: str
    type: ListingType
    address: str
    country: str
    admin: str
    city: str
    price: int
    num_of_guests: int
    document: strawberry.Private[models.Listing]
    authorized: strawberry.Private[bool] = False

    @classmethod
    def from_document(cls, listing: models.Listing, authorized: bool = False) -> "Listing":
        return cls(
            id=strawberry.ID(str(listing.id)),
            title=listing.title,
            description=listing.description,
            image=listing.image,
            type=ListingType(listing.type),
            address=listing.address,
            country=listing.country,
            admin=listing.admin,
            city=listing.city,
            price=listing.price,
            num_of_guests=listing.num_of_guests,
            document=listing,
            authorized=authorized,
        )

    @strawberry.field
    async def host(self, info: Info) -> "User":
        host = await user_service.find_user(info.context.db, self.document.host, missing="host can't be found")
        return User.from_document(host)

    @strawberry.field
    async def bookings(self, info: Info, limit: int, page: int) -> Optional["Bookings"]:
        if not self.authorized:
            return None
        with operation_errors("query listing bookings"):
            bookings_page = await booking_service.bookings_by_ids(
                info.context.db, self.document.bookings, limit=limit, page=page
            )
        return Bookings.from_page(bookings_page)

    @strawberry.field
    def bookings_index(self) -> str:
        return json.dumps(self.document.bookings_index)


@strawberry.type
class User:
    id: strawberry.ID
    name: str
    avatar: str
    contact: str
    has_wallet: bool
    document: strawberry.Private[models.User]
    authorized: strawberry.Private[bool] = False

    @classmethod
    def from_document(cls, user: models.User, authorized: bool = False) -> "User":
        return cls(
            id=strawberry.ID(user.id),
            name=user.name,
            avatar=user.avatar,
            contact=user.contact,
            has_wallet=bool(user.wallet_id),
            document=user,
            authorized=authorized,
        )

    @strawberry.field(description="Private: null unless the viewer is this user.")
    def income(self) -> int | None:
        return self.document.income if self.authorized else None

    @strawberry.field
    async def bookings(self, info: Info, limit: int, page: int) -> Optional["Bookings"]:
        if not self.authorized:
            return None
        with operation_errors("query user bookings"):
            bookings_page = await booking_service.bookings_by_ids(
                info.context.db, self.document.bookings, limit=limit, page=page
            )
        return Bookings.from_page(bookings_page)

    @strawberry.field
    async def listings(self, info: Info, limit: int, page: int) -> "Listings":
        with operation_errors("query user listings"):
            listings_page = await listing_service.listings_by_ids(
                info.context.db, self.document.listings, limit=limit, page=page
            )
        return Listings.from_page(listings_page)


@strawberry.type
class Booking:
    id: strawberry.ID
    check_in: str
    check_out: str
    document: strawberry.Private[models.Booking]

    @classmethod
    def from_document(cls, booking: models.Booking) -> "Booking":
        return cls(
            id=strawberry.ID(str(booking.id)),
            check_in=booking.check_in,
            check_out=booking.check_out,
            document=booking,
        )

    @strawberry.field
    async def listing(self, info: Info) -> Listing:
        listing = await listing_service.find_listing(info.context.db, self.document.listing)
        return Listing.from_document(listing)

    @strawberry.field
    async def tenant(self, info: Info) -> User:
        tenant = await user_service.find_user(info.context.db, self.document.tenant, missing="tenant can't be found")
        return User.from_document(tenant)


@strawberry.type
class Bookings:
    total: int
    result: list[Booking]

    @classmethod
    def from_page(cls, page: booking_service.BookingsPage) -> "Bookings":
        return cls(total=page.total, result=[Booking.from_document(booking) for booking in page.result])


@strawberry.type
class Listings:
    region: str | None
    total: int
    result: list[Listing]

    @classmethod
    def from_page(cls, page: ListingsPage) -> "Listings":
        return cls(
            region=page.region,
            total=page.total,
            result=[Listing.from_document(listing) for listing in page.result],
        )


@strawberry.type
class CityAndAdmin:
    admin: str | None
    city: str | None


@strawberry.type
class CityAndAdminResults:
    total: int
    result: list[CityAndAdmin]


AutoCompleteResult = Annotated[
    Union[Listings, CityAndAdminResults],
    strawberry.union("AutoCompleteResult"),
]


def to_autocomplete_result(found: AutoCompleteMatch) -> Listings | CityAndAdminResults:
    """Map the service's tagged variant onto the schema union."""
    match found:
        case CityMatches(result=cities):
            return CityAndAdminResults(
                total=len(cities),
                result=[CityAndAdmin(admin=city.admin, city=city.city) for city in cities],
            )
        case AddressMatches(result=listings):
            return Listings(
                region=None,
                total=len(listings),
                result=[Listing.from_document(listing) for listing in listings],
            )
    raise TypeError(f"unexpected autocomplete result {found!r}")


@strawberry.type
class Viewer:
    id: Optional[strawberry.ID]
    token: str | None
    avatar: str | None
    has_wallet: bool | None  # never the wallet id itself
    did_request: bool

    @classmethod
    def from_model(cls, viewer: models.Viewer) -> "Viewer":
        return cls(
            id=strawberry.ID(viewer.id) if viewer.id else None,
            token=viewer.token,
            avatar=viewer.avatar,
            has_wallet=bool(viewer.wallet_id) if viewer.id else None,
            did_request=viewer.did_request,
        )

"""Listing service: search, lookup, nested lookups and the host-listing mutation."""

import logging
from dataclasses import dataclass
from enum import Enum

from bson import ObjectId
from pydantic import ValidationError

from tinyhouse.database import Database, find_page, parse_object_id
from tinyhouse.errors import InvalidInputError, NotAuthorizedError, NotFoundError
from tinyhouse.lib.geocoding import geocode
from tinyhouse.lib.images import upload_image
from tinyhouse.models.listing import Listing
from tinyhouse.models.user import User
from tinyhouse.schemas import as_invalid_input
from tinyhouse.schemas.listing import HostListingCreate

logger = logging.getLogger(__name__)


class ListingsFilter(str, Enum):
    PRICE_LOW_TO_HIGH = "PRICE_LOW_TO_HIGH"
    PRICE_HIGH_TO_LOW = "PRICE_HIGH_TO_LOW"


_SORT_BY_FILTER = {
    ListingsFilter.PRICE_LOW_TO_HIGH: [("price", 1)],
    ListingsFilter.PRICE_HIGH_TO_LOW: [("price", -1)],
}


@dataclass(frozen=True)
class ListingsPage:
    total: int
    result: list[Listing]
    region: str | None = None


@dataclass(frozen=True)
class ListingView:
    """A listing plus whether the current viewer is its host.

    The flag only lives for one response and is never written to the listing.
    """

    listing: Listing
    authorized: bool = False


def format_region(country: str, admin: str | None, city: str | None) -> str:
    return ", ".join(part for part in (city, admin, country) if part)


async def search_listings(
    db: Database,
    *,
    filter: ListingsFilter | None,
    limit: int,
    page: int,
    location: str | None = None,
) -> ListingsPage:
    """Return one page of listings, optionally narrowed to a geocoded location."""
    query: dict = {}
    region = None

    if location:
        address = await geocode(location)
        if not address.country:
            raise InvalidInputError("no country found")
        query["country"] = address.country
        if address.admin:
            query["admin"] = address.admin
        if address.city:
            query["city"] = address.city
        region = format_region(address.country, address.admin, address.city)

    total, documents = await find_page(
        db.listings,
        query,
        limit=limit,
        page=page,
        sort=_SORT_BY_FILTER.get(filter),
    )
    return ListingsPage(
        total=total,
        result=[Listing.model_validate(doc) for doc in documents],
        region=region,
    )


async def get_listing(db: Database, listing_id: str, viewer: User | None) -> ListingView:
    """Fetch one listing; the view is authorized only when the viewer hosts it."""
    doc = await db.listings.find_one({"_id": parse_object_id(listing_id)})
    if doc is None:
        raise NotFoundError("listing can't be found")

    listing = Listing.model_validate(doc)
    authorized = viewer is not None and viewer.id == listing.host
    return ListingView(listing=listing, authorized=authorized)


async def find_listing(db: Database, listing_id: ObjectId) -> Listing:
    doc = await db.listings.find_one({"_id": listing_id})
    if doc is None:
        raise NotFoundError("listing can't be found")
    return Listing.model_validate(doc)


async def listings_by_ids(db: Database, ids: list[ObjectId], *, limit: int, page: int) -> ListingsPage:
    total, documents = await find_page(db.listings, {"_id": {"$in": ids}}, limit=limit, page=page)
    return ListingsPage(total=total, result=[Listing.model_validate(doc) for doc in documents])


async def host_listing(db: Database, viewer: User | None, data: dict) -> Listing:
    """Create a listing owned by ``viewer`` and link it from the viewer's user document.

    Input is validated before any I/O. The insert and the owner update are two
    independent writes: a failure between them leaves the listing unlinked.
    """
    try:
        listing_input = HostListingCreate.model_validate(data)
    except ValidationError as exc:
        raise as_invalid_input(exc) from exc

    if viewer is None:
        raise NotAuthorizedError("viewer cannot be found")

    address = await geocode(listing_input.address)
    if not address.country or not address.admin or not address.city:
        raise InvalidInputError("invalid address input")

    image_url = await upload_image(listing_input.image)

    listing = Listing(
        id=ObjectId(),
        **listing_input.model_dump(exclude={"image"}),
        image=image_url,
        host=viewer.id,
        country=address.country,
        admin=address.admin,
        city=address.city,
        bookings=[],
        bookings_index={},
    )
    await db.listings.insert_one(listing.to_mongo())
    await db.users.update_one({"_id": viewer.id}, {"$push": {"listings": listing.id}})

    logger.info("User %s hosted listing %s in %s", viewer.id, listing.id, listing.city)
    return listing

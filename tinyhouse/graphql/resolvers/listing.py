"""Listing queries and the hostListing mutation."""

import dataclasses
from typing import Optional

import strawberry

from tinyhouse.auth.viewer import authorize
from tinyhouse.graphql.context import Info
from tinyhouse.graphql.errors import operation_errors
from tinyhouse.graphql.inputs import HostListingInput
from tinyhouse.graphql.types import (
    AutoCompleteResult,
    Listing,
    Listings,
    ListingsFilter,
    to_autocomplete_result,
)
from tinyhouse.services import autocomplete_service, listing_service


async def resolve_listing(info: Info, id: strawberry.ID) -> Listing:
    with operation_errors("query listing"):
        viewer = await authorize(info.context.db, info.context.request)
        view = await listing_service.get_listing(info.context.db, id, viewer)
    return Listing.from_document(view.listing, authorized=view.authorized)


async def resolve_listings(
    info: Info,
    filter: ListingsFilter,
    limit: int,
    page: int,
    location: Optional[str] = None,
) -> Listings:
    with operation_errors("query listings"):
        listings_page = await listing_service.search_listings(
            info.context.db,
            location=location,
            filter=filter,
            limit=limit,
            page=page,
        )
    return Listings.from_page(listings_page)


async def resolve_auto_complete_options(info: Info, text: str) -> Optional[AutoCompleteResult]:
    with operation_errors("search listings"):
        found = await autocomplete_service.autocomplete(info.context.db, text)
    return to_autocomplete_result(found)


async def resolve_host_listing(info: Info, input: HostListingInput) -> Listing:
    with operation_errors("host listing"):
        viewer = await authorize(info.context.db, info.context.request)
        listing = await listing_service.host_listing(info.context.db, viewer, dataclasses.asdict(input))
    return Listing.from_document(listing, authorized=True)

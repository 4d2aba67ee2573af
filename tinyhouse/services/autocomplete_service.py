"""Typeahead search over listings: city suggestions first, raw addresses as a fallback.

Both phases rely on an Atlas Search index covering ``city`` and ``address``
with the ``autocomplete`` field type.
"""

import logging
from dataclasses import dataclass

from tinyhouse.database import Database
from tinyhouse.models.listing import Listing

logger = logging.getLogger(__name__)

ADDRESS_MATCH_LIMIT = 5


@dataclass(frozen=True)
class CityAndAdmin:
    admin: str | None
    city: str | None


@dataclass(frozen=True)
class CityMatches:
    """Distinct (admin, city) pairs whose city matched the text."""

    result: list[CityAndAdmin]


@dataclass(frozen=True)
class AddressMatches:
    """Listings whose address matched the text, at most ``ADDRESS_MATCH_LIMIT``."""

    result: list[Listing]


AutoCompleteMatch = CityMatches | AddressMatches


def _autocomplete_stage(text: str, path: str) -> dict:
    return {"$search": {"autocomplete": {"query": text, "path": path}}}


async def autocomplete(db: Database, text: str) -> AutoCompleteMatch:
    cursor = await db.listings.aggregate(
        [
            _autocomplete_stage(text, "city"),
            {"$group": {"_id": {"admin": "$admin", "city": "$city"}}},
        ]
    )
    groups = await cursor.to_list()
    if groups:
        cities = list(
            dict.fromkeys(
                CityAndAdmin(admin=group["_id"].get("admin"), city=group["_id"].get("city"))
                for group in groups
            )
        )
        return CityMatches(result=cities)

    logger.debug("No city matched %r, searching addresses", text)
    cursor = await db.listings.aggregate(
        [
            _autocomplete_stage(text, "address"),
            {"$limit": ADDRESS_MATCH_LIMIT},
        ]
    )
    documents = await cursor.to_list()
    return AddressMatches(result=[Listing.model_validate(doc) for doc in documents[:ADDRESS_MATCH_LIMIT]])

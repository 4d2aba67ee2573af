"""Async MongoDB client, collection handles, and the request-scoped database dependency."""

import logging
from dataclasses import dataclass

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from tinyhouse.config import settings
from tinyhouse.errors import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Database:
    """Typed handles to the three collections every resolver works with.

    Constructed once at startup and passed explicitly to services, so tests
    can substitute any object exposing the same collection API.
    """

    listings: AsyncCollection
    users: AsyncCollection
    bookings: AsyncCollection

    @classmethod
    def from_database(cls, database: AsyncDatabase) -> "Database":
        return cls(
            listings=database["listings"],
            users=database["users"],
            bookings=database["bookings"],
        )


def create_client() -> AsyncMongoClient:
    """Create the process-wide Mongo client (connections are opened lazily)."""
    logger.info("Connecting to MongoDB database %r", settings.mongodb_database)
    return AsyncMongoClient(settings.mongodb_uri)


def connect_database(client: AsyncMongoClient) -> Database:
    return Database.from_database(client[settings.mongodb_database])


def page_skip(page: int, limit: int) -> int:
    """Translate a one-based page number into a skip count (page <= 0 means the first page)."""
    return (page - 1) * limit if page > 0 else 0


async def get_database(request: Request) -> Database:
    """Return the ``Database`` attached to the app for FastAPI dependency injection.

    Usage::

        @app.get("/items")
        async def get_items(db: Database = Depends(get_database)):
            ...
    """
    return request.app.state.db


def parse_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise InvalidInputError(f"invalid id {value!r}") from exc


async def find_page(
    collection: AsyncCollection,
    query: dict,
    *,
    limit: int,
    page: int,
    sort: list[tuple[str, int]] | None = None,
) -> tuple[int, list[dict]]:
    """Return ``(total, documents)`` for one page of ``query``.

    ``total`` counts every matching document, not just the returned page.
    """
    cursor = collection.find(query, sort=sort, skip=page_skip(page, limit), limit=limit)
    documents = await cursor.to_list()
    total = await collection.count_documents(query)
    return total, documents

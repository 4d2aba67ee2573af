"""Shared test configuration and fixtures.

Every test gets its own in-memory MongoDB (mongomock-motor), injected into
the app by overriding the ``get_database`` dependency. Google, Cloudinary and
Stripe are always patched in the tests that reach them.
"""

import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from tinyhouse.auth.jwt import create_viewer_token
from tinyhouse.auth.viewer import CSRF_HEADER, VIEWER_COOKIE
from tinyhouse.database import Database, get_database
from tinyhouse.main import app
from tinyhouse.models.listing import Listing
from tinyhouse.models.user import User

# ---------------------------------------------------------------------------
# Database + HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture
def db() -> Database:
    """A fresh, empty database per test."""
    client = AsyncMongoMockClient()
    return Database.from_database(client[f"tinyhouse_test_{uuid.uuid4().hex[:8]}"])


@pytest_asyncio.fixture
async def client(db: Database) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test database."""
    app.dependency_overrides[get_database] = lambda: db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def graphql(client: AsyncClient) -> Callable[..., Awaitable[dict]]:
    """POST a GraphQL operation to ``/api`` and return the decoded body."""

    async def execute(query: str, variables: dict | None = None, headers: dict | None = None) -> dict:
        response = await client.post(
            "/api",
            json={"query": query, "variables": variables or {}},
            headers=headers or {},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return execute


# ---------------------------------------------------------------------------
# Document factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_user(db: Database) -> Callable[..., Awaitable[User]]:
    async def create(**overrides) -> User:
        unique = uuid.uuid4().hex[:8]
        fields = {
            "id": f"google-{unique}",
            "token": uuid.uuid4().hex,
            "name": f"User {unique}",
            "avatar": f"https://example.com/avatars/{unique}.png",
            "contact": f"user-{unique}@test.com",
            "income": 0,
        }
        fields.update(overrides)
        user = User(**fields)
        await db.users.insert_one(user.to_mongo())
        return user

    return create


@pytest.fixture
def make_listing(db: Database) -> Callable[..., Awaitable[Listing]]:
    async def create(host: User, **overrides) -> Listing:
        fields = {
            "id": ObjectId(),
            "title": "Cozy cabin",
            "description": "A small cabin by the lake.",
            "image": "https://res.cloudinary.com/demo/image/upload/cabin.jpg",
            "host": host.id,
            "type": "HOUSE",
            "address": "1 Lake Rd, Toronto, ON, Canada",
            "country": "Canada",
            "admin": "Ontario",
            "city": "Toronto",
            "price": 12000,
            "num_of_guests": 2,
        }
        fields.update(overrides)
        listing = Listing(**fields)
        await db.listings.insert_one(listing.to_mongo())
        await db.users.update_one({"_id": host.id}, {"$push": {"listings": listing.id}})
        return listing

    return create


# ---------------------------------------------------------------------------
# Viewer session
# ---------------------------------------------------------------------------


def viewer_headers(user: User) -> dict[str, str]:
    """Cookie + CSRF header pair that ``authorize`` accepts for ``user``."""
    return {
        "Cookie": f"{VIEWER_COOKIE}={create_viewer_token(user.id)}",
        CSRF_HEADER: user.token,
    }


@pytest.fixture
def headers_for() -> Callable[[User], dict[str, str]]:
    return viewer_headers


@pytest_asyncio.fixture
async def test_user(make_user) -> User:
    return await make_user(name="Test User")


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict[str, str]:
    return viewer_headers(test_user)

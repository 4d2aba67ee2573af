"""Tests for resolving the viewer from the cookie + CSRF header pair."""

from fastapi import Request

from tinyhouse.auth.jwt import create_viewer_token
from tinyhouse.auth.viewer import CSRF_HEADER, VIEWER_COOKIE, authorize
from tinyhouse.database import Database


def _request(cookie_user_id: str | None = None, csrf_token: str | None = None) -> Request:
    headers = []
    if cookie_user_id is not None:
        headers.append((b"cookie", f"{VIEWER_COOKIE}={create_viewer_token(cookie_user_id)}".encode()))
    if csrf_token is not None:
        headers.append((CSRF_HEADER.lower().encode(), csrf_token.encode()))
    return Request({"type": "http", "method": "POST", "path": "/api", "headers": headers})


class TestAuthorize:
    async def test_matching_cookie_and_token(self, db: Database, test_user):
        viewer = await authorize(db, _request(test_user.id, test_user.token))
        assert viewer is not None
        assert viewer.id == test_user.id

    async def test_wrong_token(self, db: Database, test_user):
        assert await authorize(db, _request(test_user.id, "stale-token")) is None

    async def test_missing_csrf_header(self, db: Database, test_user):
        assert await authorize(db, _request(test_user.id, None)) is None

    async def test_missing_cookie(self, db: Database, test_user):
        assert await authorize(db, _request(None, test_user.token)) is None

    async def test_token_of_another_user(self, db: Database, make_user, test_user):
        other = await make_user()
        assert await authorize(db, _request(test_user.id, other.token)) is None

    async def test_tampered_cookie(self, db: Database, test_user):
        request = Request(
            {
                "type": "http",
                "method": "POST",
                "path": "/api",
                "headers": [
                    (b"cookie", f"{VIEWER_COOKIE}={test_user.id}".encode()),
                    (CSRF_HEADER.lower().encode(), test_user.token.encode()),
                ],
            }
        )
        assert await authorize(db, request) is None

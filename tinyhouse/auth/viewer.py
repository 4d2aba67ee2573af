"""Resolve the requesting viewer from the session cookie and CSRF token header."""

import logging

from fastapi import Request, Response

from tinyhouse.auth.jwt import create_viewer_token, read_viewer_id
from tinyhouse.config import settings
from tinyhouse.database import Database
from tinyhouse.models.user import User

logger = logging.getLogger(__name__)

VIEWER_COOKIE = "viewer"
CSRF_HEADER = "X-CSRF-TOKEN"


def viewer_id_from_request(request: Request) -> str | None:
    return read_viewer_id(request.cookies.get(VIEWER_COOKIE))


async def authorize(db: Database, request: Request) -> User | None:
    """Return the user whose id is in the viewer cookie and whose token matches the header.

    Returns ``None`` instead of raising when either half is missing or wrong,
    so public queries can call it unconditionally.
    """
    viewer_id = viewer_id_from_request(request)
    token = request.headers.get(CSRF_HEADER)
    if viewer_id is None or not token:
        return None

    doc = await db.users.find_one({"_id": viewer_id, "token": token})
    if doc is None:
        return None
    return User.model_validate(doc)


def set_viewer_cookie(response: Response, user_id: str) -> None:
    response.set_cookie(
        VIEWER_COOKIE,
        create_viewer_token(user_id),
        max_age=settings.viewer_cookie_max_age_days * 24 * 60 * 60,
        httponly=True,
        samesite="strict",
        secure=settings.secure_cookies,
    )


def clear_viewer_cookie(response: Response) -> None:
    response.delete_cookie(
        VIEWER_COOKIE,
        httponly=True,
        samesite="strict",
        secure=settings.secure_cookies,
    )

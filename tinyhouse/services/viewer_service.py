"""Viewer service: Google log-in, cookie log-in, log-out and Stripe wallet linking."""

import logging
import secrets

from fastapi import Request, Response
from pymongo import ReturnDocument

from tinyhouse.auth.oauth import fetch_google_profile, get_google_user_info
from tinyhouse.auth.viewer import clear_viewer_cookie, set_viewer_cookie, viewer_id_from_request
from tinyhouse.billing.stripe_client import connect
from tinyhouse.database import Database
from tinyhouse.errors import NotAuthorizedError, NotFoundError, UpstreamError
from tinyhouse.models.user import User
from tinyhouse.models.viewer import Viewer

logger = logging.getLogger(__name__)


async def _log_in_via_google(db: Database, code: str, token: str, response: Response) -> User:
    """Find-or-create the user behind a Google authorization code and set the viewer cookie."""
    info = get_google_user_info(await fetch_google_profile(code))
    if not all(info.values()):
        raise UpstreamError("Google login error")

    doc = await db.users.find_one_and_update(
        {"_id": info["id"]},
        {
            "$set": {
                "name": info["name"],
                "avatar": info["avatar"],
                "contact": info["contact"],
                "token": token,
            }
        },
        return_document=ReturnDocument.AFTER,
    )

    if doc is not None:
        user = User.model_validate(doc)
    else:
        logger.info("Creating user %s from Google sign-in", info["id"])
        user = User(
            id=info["id"],
            token=token,
            name=info["name"],
            avatar=info["avatar"],
            contact=info["contact"],
            income=0,
            bookings=[],
            listings=[],
        )
        await db.users.insert_one(user.to_mongo())

    set_viewer_cookie(response, user.id)
    return user


async def _log_in_via_cookie(db: Database, token: str, request: Request, response: Response) -> User | None:
    """Refresh the token of the user named by the viewer cookie; clear the cookie if there is none."""
    viewer_id = viewer_id_from_request(request)
    doc = None
    if viewer_id is not None:
        doc = await db.users.find_one_and_update(
            {"_id": viewer_id},
            {"$set": {"token": token}},
            return_document=ReturnDocument.AFTER,
        )

    if doc is None:
        clear_viewer_cookie(response)
        return None
    return User.model_validate(doc)


async def log_in(db: Database, request: Request, response: Response, code: str | None = None) -> Viewer:
    """Log in with a Google ``code`` when given, otherwise from the viewer cookie.

    Every successful log-in rotates the user's token; the client echoes it
    back in the ``X-CSRF-TOKEN`` header.
    """
    token = secrets.token_hex(16)
    if code:
        user = await _log_in_via_google(db, code, token, response)
    else:
        user = await _log_in_via_cookie(db, token, request, response)

    if user is None:
        return Viewer(did_request=True)

    logger.info("User %s logged in", user.id)
    return Viewer.from_user(user)


def log_out(response: Response) -> Viewer:
    clear_viewer_cookie(response)
    return Viewer(did_request=True)


async def connect_stripe(db: Database, viewer: User | None, code: str) -> Viewer:
    if viewer is None:
        raise NotAuthorizedError("viewer cannot be found")

    wallet_id = await connect(code)
    doc = await db.users.find_one_and_update(
        {"_id": viewer.id},
        {"$set": {"walletId": wallet_id}},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise NotFoundError("viewer could not be updated")

    logger.info("User %s connected Stripe wallet", viewer.id)
    return Viewer.from_user(User.model_validate(doc))


async def disconnect_stripe(db: Database, viewer: User | None) -> Viewer:
    if viewer is None:
        raise NotAuthorizedError("viewer cannot be found")

    doc = await db.users.find_one_and_update(
        {"_id": viewer.id},
        {"$unset": {"walletId": ""}},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise NotFoundError("viewer could not be updated")

    logger.info("User %s disconnected Stripe wallet", viewer.id)
    return Viewer.from_user(User.model_validate(doc))

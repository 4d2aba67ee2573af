"""Google OAuth (OpenID Connect) sign-in using authlib's httpx integration."""

import logging

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import AsyncOAuth2Client

from tinyhouse.config import settings
from tinyhouse.errors import UpstreamError

logger = logging.getLogger(__name__)

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"


def get_google_client() -> AsyncOAuth2Client:
    return AsyncOAuth2Client(
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        scope="openid email profile",
        redirect_uri=settings.google_redirect_uri,
    )


async def get_auth_url() -> str:
    """Build the Google consent-screen URL the client redirects to."""
    async with get_google_client() as client:
        url, _state = client.create_authorization_url(
            GOOGLE_AUTHORIZE_URL,
            access_type="online",
        )
    return url


async def fetch_google_profile(code: str) -> dict:
    """Exchange an authorization ``code`` and return the raw OpenID userinfo claims."""
    async with get_google_client() as client:
        try:
            await client.fetch_token(GOOGLE_TOKEN_URL, code=code)
            response = await client.get(GOOGLE_USERINFO_URL)
            response.raise_for_status()
        except (AuthlibBaseError, httpx.HTTPError) as exc:
            logger.warning("Google code exchange failed: %s", exc)
            raise UpstreamError(f"Google login error: {exc}") from exc
    return response.json()


def get_google_user_info(profile: dict) -> dict:
    """Extract standardized user info from Google userinfo claims.

    Returns:
        dict with keys: id, name, avatar, contact (``None`` where Google omitted them)
    """
    return {
        "id": profile.get("sub"),
        "name": profile.get("name"),
        "avatar": profile.get("picture"),
        "contact": profile.get("email"),
    }

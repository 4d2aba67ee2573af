"""JWT creation and verification for the ``viewer`` session cookie."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from tinyhouse.config import settings


def create_viewer_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Create the signed cookie value identifying a logged-in user.

    Args:
        user_id: The user's ``_id``.
        expires_delta: Custom expiration duration. Defaults to
            ``settings.viewer_cookie_max_age_days`` days.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.viewer_cookie_max_age_days))
    payload = {"sub": user_id, "exp": expire, "iat": now, "type": "viewer"}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Raises:
        jose.JWTError: If the token is invalid, expired, or malformed.
    """
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])


def read_viewer_id(token: str | None) -> str | None:
    """Return the user id carried by a viewer cookie, or ``None`` if it is missing or invalid."""
    if not token:
        return None

    try:
        payload = decode_token(token)
    except JWTError:
        return None

    if payload.get("type") != "viewer":
        return None
    return payload.get("sub")

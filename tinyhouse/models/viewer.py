"""Viewer: the request-scoped identity of whoever is calling the API."""

from pydantic import BaseModel

from tinyhouse.models.user import User


class Viewer(BaseModel):
    """Never persisted. ``did_request`` tells the client a login attempt happened."""

    id: str | None = None
    token: str | None = None
    avatar: str | None = None
    wallet_id: str | None = None
    did_request: bool = False

    @classmethod
    def from_user(cls, user: User) -> "Viewer":
        return cls(
            id=user.id,
            token=user.token,
            avatar=user.avatar,
            wallet_id=user.wallet_id,
            did_request=True,
        )

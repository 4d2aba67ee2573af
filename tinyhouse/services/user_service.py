"""User lookups for the ``user`` query and nested host/tenant fields."""

from dataclasses import dataclass

from tinyhouse.database import Database
from tinyhouse.errors import NotFoundError
from tinyhouse.models.user import User


@dataclass(frozen=True)
class UserView:
    """A user plus whether the current viewer is that same user."""

    user: User
    authorized: bool = False


async def find_user(db: Database, user_id: str, missing: str = "user can't be found") -> User:
    doc = await db.users.find_one({"_id": user_id})
    if doc is None:
        raise NotFoundError(missing)
    return User.model_validate(doc)


async def get_user(db: Database, user_id: str, viewer: User | None) -> UserView:
    user = await find_user(db, user_id)
    return UserView(user=user, authorized=viewer is not None and viewer.id == user.id)

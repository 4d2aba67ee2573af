"""Per-request GraphQL context carrying the explicit database handle."""

from fastapi import Depends
from strawberry.fastapi import BaseContext
from strawberry.types import Info as _Info

from tinyhouse.database import Database, get_database


class Context(BaseContext):
    """Strawberry fills in ``request`` and ``response`` after construction."""

    def __init__(self, db: Database) -> None:
        super().__init__()
        self.db = db


Info = _Info[Context, None]


async def get_context(db: Database = Depends(get_database)) -> Context:
    return Context(db)

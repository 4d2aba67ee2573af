"""The ``user`` query."""

import strawberry

from tinyhouse.auth.viewer import authorize
from tinyhouse.graphql.context import Info
from tinyhouse.graphql.errors import operation_errors
from tinyhouse.graphql.types import User
from tinyhouse.services import user_service


async def resolve_user(info: Info, id: strawberry.ID) -> User:
    with operation_errors("query user"):
        viewer = await authorize(info.context.db, info.context.request)
        view = await user_service.get_user(info.context.db, id, viewer)
    return User.from_document(view.user, authorized=view.authorized)

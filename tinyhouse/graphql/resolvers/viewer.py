"""Session and wallet resolvers: authUrl, logIn, logOut, connectStripe, disconnectStripe."""

from typing import Optional

from tinyhouse.auth.oauth import get_auth_url
from tinyhouse.auth.viewer import authorize
from tinyhouse.graphql.context import Info
from tinyhouse.graphql.errors import operation_errors
from tinyhouse.graphql.inputs import ConnectStripeInput, LogInInput
from tinyhouse.graphql.types import Viewer
from tinyhouse.services import viewer_service


async def resolve_auth_url() -> str:
    with operation_errors("query Google Auth Url"):
        return await get_auth_url()


async def resolve_log_in(info: Info, input: Optional[LogInInput] = None) -> Viewer:
    with operation_errors("log in"):
        viewer = await viewer_service.log_in(
            info.context.db,
            info.context.request,
            info.context.response,
            code=input.code if input else None,
        )
    return Viewer.from_model(viewer)


def resolve_log_out(info: Info) -> Viewer:
    with operation_errors("log out"):
        return Viewer.from_model(viewer_service.log_out(info.context.response))


async def resolve_connect_stripe(info: Info, input: ConnectStripeInput) -> Viewer:
    with operation_errors("connect with Stripe"):
        viewer = await authorize(info.context.db, info.context.request)
        updated = await viewer_service.connect_stripe(info.context.db, viewer, input.code)
    return Viewer.from_model(updated)


async def resolve_disconnect_stripe(info: Info) -> Viewer:
    with operation_errors("disconnect with Stripe"):
        viewer = await authorize(info.context.db, info.context.request)
        updated = await viewer_service.disconnect_stripe(info.context.db, viewer)
    return Viewer.from_model(updated)

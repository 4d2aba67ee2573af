"""Root schema and the FastAPI router that serves it."""

import strawberry
from strawberry.fastapi import GraphQLRouter

from tinyhouse.config import settings
from tinyhouse.graphql.context import get_context
from tinyhouse.graphql.resolvers.booking import resolve_create_booking
from tinyhouse.graphql.resolvers.listing import (
    resolve_auto_complete_options,
    resolve_host_listing,
    resolve_listing,
    resolve_listings,
)
from tinyhouse.graphql.resolvers.user import resolve_user
from tinyhouse.graphql.resolvers.viewer import (
    resolve_auth_url,
    resolve_connect_stripe,
    resolve_disconnect_stripe,
    resolve_log_in,
    resolve_log_out,
)


@strawberry.type
class Query:
    auth_url = strawberry.field(resolver=resolve_auth_url)
    user = strawberry.field(resolver=resolve_user)
    listing = strawberry.field(resolver=resolve_listing)
    listings = strawberry.field(resolver=resolve_listings)
    auto_complete_options = strawberry.field(resolver=resolve_auto_complete_options)


@strawberry.type
class Mutation:
    log_in = strawberry.mutation(resolver=resolve_log_in)
    log_out = strawberry.mutation(resolver=resolve_log_out)
    connect_stripe = strawberry.mutation(resolver=resolve_connect_stripe)
    disconnect_stripe = strawberry.mutation(resolver=resolve_disconnect_stripe)
    host_listing = strawberry.mutation(resolver=resolve_host_listing)
    create_booking = strawberry.mutation(resolver=resolve_create_booking)


schema = strawberry.Schema(query=Query, mutation=Mutation)

router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if settings.debug else None,
)

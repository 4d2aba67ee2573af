"""Strawberry GraphQL schema, types and resolvers mounted at ``/api``."""

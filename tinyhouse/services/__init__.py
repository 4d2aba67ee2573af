"""Query, aggregation and mutation logic shared by the GraphQL resolvers.

Services take an explicit ``Database`` and an already-resolved viewer, and
raise ``tinyhouse.errors`` exceptions; they know nothing about GraphQL.
"""

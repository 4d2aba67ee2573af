"""TinyHouse: GraphQL backend for a home-sharing marketplace."""

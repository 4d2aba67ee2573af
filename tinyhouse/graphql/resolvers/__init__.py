"""Root Query and Mutation resolvers, one module per resource."""

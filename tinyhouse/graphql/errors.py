"""Turn service failures into plain GraphQL errors."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from graphql import GraphQLError

logger = logging.getLogger(__name__)


@contextmanager
def operation_errors(action: str) -> Iterator[None]:
    """Re-raise any failure inside the block as ``Failed to <action>: <cause>``."""
    try:
        yield
    except GraphQLError:
        raise
    except Exception as exc:
        logger.info("Failed to %s: %s", action, exc)
        raise GraphQLError(f"Failed to {action}: {exc}", original_error=exc) from exc

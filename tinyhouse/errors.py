"""Error types raised by the service layer.

Resolvers turn every one of these into a plain GraphQL error message; the
subclasses exist so callers and tests can tell the failure categories apart.
"""


class TinyHouseError(Exception):
    """Base class for all service-level failures."""


class NotFoundError(TinyHouseError):
    """A listing, user, host or booking does not exist."""


class InvalidInputError(TinyHouseError):
    """Input failed validation (lengths, enum values, prices, dates, addresses)."""


class NotAuthorizedError(TinyHouseError):
    """No viewer could be resolved, or the viewer may not perform the action."""


class UpstreamError(TinyHouseError):
    """A third-party API (Google, Cloudinary, Stripe) rejected the request."""

"""Async Stripe API wrapper for TinyHouse."""

import asyncio
import logging

import stripe
from stripe import StripeClient

from tinyhouse.config import settings
from tinyhouse.errors import UpstreamError

logger = logging.getLogger(__name__)


def get_stripe_client() -> StripeClient:
    """Create a StripeClient for async API calls.

    Sync methods stay enabled for the Connect OAuth service, which has no async variant.
    """
    return StripeClient(
        settings.stripe_secret_key,
        client_id=settings.stripe_client_id,
        max_network_retries=0,
        http_client=stripe.HTTPXClient(allow_sync_methods=True),
    )


async def connect(code: str) -> str:
    """Exchange a Stripe Connect OAuth ``code`` for the connected account id."""
    client = get_stripe_client()
    try:
        # The OAuth service has no async variant; keep the event loop free.
        response = await asyncio.to_thread(
            client.oauth.token,
            {"grant_type": "authorization_code", "code": code},
        )
    except stripe.StripeError as exc:
        raise UpstreamError(f"stripe grant error: {exc}") from exc

    stripe_user_id = getattr(response, "stripe_user_id", None)
    if not stripe_user_id:
        raise UpstreamError("stripe grant error")
    logger.info("Connected Stripe account %s", stripe_user_id)
    return stripe_user_id


async def charge(amount: int, source: str, stripe_account: str) -> stripe.Charge:
    """Charge ``amount`` (cents) from ``source`` on behalf of the host's connected account."""
    client = get_stripe_client()
    logger.info("Charging %s on connected account %s", amount, stripe_account)
    try:
        result = await client.v1.charges.create_async(
            params={
                "amount": amount,
                "currency": "usd",
                "source": source,
                "application_fee_amount": round(amount * settings.stripe_application_fee_rate),
            },
            options={"stripe_account": stripe_account},
        )
    except stripe.StripeError as exc:
        raise UpstreamError(f"failed to create charge with Stripe: {exc}") from exc

    if result.status != "succeeded":
        raise UpstreamError("failed to create charge with Stripe")
    return result

"""Tests for the Stripe wrapper (StripeClient mocked)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qs

import httpx
import pytest
import stripe

from tinyhouse.billing.stripe_client import charge, connect
from tinyhouse.config import settings
from tinyhouse.errors import UpstreamError


def _stripe_client() -> MagicMock:
    client = MagicMock()
    client.oauth.token = MagicMock(return_value=SimpleNamespace(stripe_user_id="acct_123"))
    client.v1.charges.create_async = AsyncMock(return_value=SimpleNamespace(status="succeeded"))
    return client


class TestConnect:
    async def test_returns_connected_account(self):
        client = _stripe_client()
        with patch("tinyhouse.billing.stripe_client.get_stripe_client", return_value=client):
            account = await connect("ac_code")

        assert account == "acct_123"
        client.oauth.token.assert_called_once_with({"grant_type": "authorization_code", "code": "ac_code"})

    async def test_missing_account_is_grant_error(self):
        client = _stripe_client()
        client.oauth.token.return_value = SimpleNamespace(stripe_user_id=None)
        with patch("tinyhouse.billing.stripe_client.get_stripe_client", return_value=client):
            with pytest.raises(UpstreamError, match="stripe grant error"):
                await connect("ac_code")

    async def test_stripe_error_is_grant_error(self):
        client = _stripe_client()
        client.oauth.token.side_effect = stripe.StripeError("invalid_grant")
        with patch("tinyhouse.billing.stripe_client.get_stripe_client", return_value=client):
            with pytest.raises(UpstreamError, match="stripe grant error"):
                await connect("bad_code")


class TestCharge:
    async def test_charges_connected_account_with_fee(self):
        client = _stripe_client()
        with patch("tinyhouse.billing.stripe_client.get_stripe_client", return_value=client):
            await charge(30000, "tok_visa", "acct_host")

        client.v1.charges.create_async.assert_awaited_once_with(
            params={
                "amount": 30000,
                "currency": "usd",
                "source": "tok_visa",
                "application_fee_amount": 1500,
            },
            options={"stripe_account": "acct_host"},
        )

    async def test_unsuccessful_charge_raises(self):
        client = _stripe_client()
        client.v1.charges.create_async.return_value = SimpleNamespace(status="failed")
        with patch("tinyhouse.billing.stripe_client.get_stripe_client", return_value=client):
            with pytest.raises(UpstreamError, match="failed to create charge"):
                await charge(30000, "tok_visa", "acct_host")

    async def test_stripe_error_raises(self):
        client = _stripe_client()
        client.v1.charges.create_async.side_effect = stripe.StripeError("card declined")
        with patch("tinyhouse.billing.stripe_client.get_stripe_client", return_value=client):
            with pytest.raises(UpstreamError, match="card declined"):
                await charge(30000, "tok_declined", "acct_host")


_RealClient = httpx.Client
_RealAsyncClient = httpx.AsyncClient


@pytest.fixture
def stripe_keys(monkeypatch):
    monkeypatch.setattr(settings, "stripe_secret_key", "sk_test_123")
    monkeypatch.setattr(settings, "stripe_client_id", "ca_123")


def _mock_stripe_api(handler):
    """Route the real StripeClient's HTTP traffic through ``handler``."""
    transport = httpx.MockTransport(handler)
    return (
        patch("httpx.Client", lambda *args, **kwargs: _RealClient(transport=transport)),
        patch("httpx.AsyncClient", lambda *args, **kwargs: _RealAsyncClient(transport=transport)),
    )


class TestRealStripeClient:
    """The real ``get_stripe_client()`` with only the HTTP transport stubbed."""

    async def test_connect_exchanges_code(self, stripe_keys):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(
                200,
                json={"access_token": "sk_acct", "token_type": "bearer", "stripe_user_id": "acct_123"},
            )

        sync_patch, async_patch = _mock_stripe_api(handler)
        with sync_patch, async_patch:
            account = await connect("ac_code")

        assert account == "acct_123"
        assert seen["url"] == "https://connect.stripe.com/oauth/token"
        assert seen["form"]["grant_type"] == ["authorization_code"]
        assert seen["form"]["code"] == ["ac_code"]

    async def test_connect_invalid_grant_is_grant_error(self, stripe_keys):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": "invalid_grant", "error_description": "Authorization code does not exist"},
            )

        sync_patch, async_patch = _mock_stripe_api(handler)
        with sync_patch, async_patch:
            with pytest.raises(UpstreamError, match="stripe grant error"):
                await connect("expired_code")

    async def test_charge_on_connected_account(self, stripe_keys):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["account"] = request.headers.get("Stripe-Account")
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={"id": "ch_1", "object": "charge", "status": "succeeded"})

        sync_patch, async_patch = _mock_stripe_api(handler)
        with sync_patch, async_patch:
            result = await charge(30000, "tok_visa", "acct_host")

        assert result.status == "succeeded"
        assert seen["account"] == "acct_host"
        assert seen["form"]["amount"] == ["30000"]
        assert seen["form"]["application_fee_amount"] == ["1500"]

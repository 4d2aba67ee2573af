"""Stripe Connect integration: host wallets and booking charges."""

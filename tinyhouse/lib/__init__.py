"""Thin async wrappers around third-party HTTP APIs (no retries, no caching)."""

"""Shared, deterministic timestamps for tests."""

from datetime import UTC, datetime


# Fixed reference time; scoring never reads a live clock.
FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)

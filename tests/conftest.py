"""
Pytest Configuration and Shared Fixtures
=========================================

Common fixtures used across all test modules.

For Developers:
    - Import fixtures by name in test files (pytest auto-discovers conftest.py)
    - All timestamps are UTC and relative to the t0 fixture
    - Add new shared fixtures here, test-specific fixtures in test files
"""

from datetime import datetime, timedelta, timezone

import pytest

from schemas.candelabra import TierConfig
from schemas.market_data import Sample

T0 = datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)


def at(seconds: float = 0, value: float = 0.0) -> Sample:
    """Sample `seconds` after T0."""
    return Sample(timestamp=T0 + timedelta(seconds=seconds), value=value)


@pytest.fixture
def t0():
    """Reference instant every test timeline starts from."""
    return T0


@pytest.fixture
def one_minute():
    """Single 1m tier (finest and coarsest at once)."""
    return [TierConfig("1m", timedelta(minutes=1))]


@pytest.fixture
def minute_and_three():
    """Two tiers: 1m branch feeding a 3m leaf."""
    return [
        TierConfig("1m", timedelta(minutes=1)),
        TierConfig("3m", timedelta(minutes=3)),
    ]


@pytest.fixture
def intraday():
    """Four tiers from 1m to 1h."""
    return [
        TierConfig("1m", timedelta(minutes=1)),
        TierConfig("5m", timedelta(minutes=5)),
        TierConfig("15m", timedelta(minutes=15)),
        TierConfig("1h", timedelta(hours=1)),
    ]

"""
Unit tests for the value types.

Tests cover:
- parse_timestamp: ISO strings, epoch milliseconds, datetimes
- Sample / Candlestick: dict and JSON projections
- TierConfig / Tier / Candelabra: Validation, lookup, reporting projection
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from engine.candelabra import create, ingest
from schemas.candelabra import TierConfig
from schemas.market_data import Candlestick, Sample, parse_timestamp
from tests.conftest import at


class TestParseTimestamp:
    """Tests for parse_timestamp function."""

    def test_iso_with_z_suffix(self, t0):
        assert parse_timestamp("2024-01-01T09:30:00Z") == t0

    def test_epoch_milliseconds(self):
        assert parse_timestamp(1_700_000_000_500) == datetime(
            2023, 11, 14, 22, 13, 20, 500000, tzinfo=timezone.utc
        )

    def test_datetime_passthrough(self, t0):
        assert parse_timestamp(t0) is t0

    def test_unsupported_type(self):
        with pytest.raises(ValueError, match="Unsupported timestamp"):
            parse_timestamp(None)


class TestSample:
    """Tests for Sample serialization."""

    def test_to_dict(self):
        assert at(0, 2.5).to_dict() == {"timestamp": "2024-01-01T09:30:00+00:00", "value": 2.5}

    def test_from_json(self, t0):
        sample = Sample.from_json('{"timestamp": "2024-01-01T09:30:00Z", "value": 3}')

        assert sample == Sample(t0, 3.0)

    def test_is_immutable(self):
        with pytest.raises(AttributeError):
            at(0, 1).value = 2


class TestCandlestick:
    """Tests for Candlestick serialization."""

    def test_dict_projection(self, t0):
        c = Candlestick(1, 2, 3, 0.5, 1.5, t0, t0 + timedelta(minutes=1))

        data = json.loads(c.to_json())

        assert data["open_at"] == "2024-01-01T09:30:00+00:00"
        assert data["close_at"] == "2024-01-01T09:31:00+00:00"
        assert Candlestick.from_dict(data) == c


class TestTierConfig:
    """Tests for TierConfig."""

    def test_non_positive_duration_rejected(self):
        with pytest.raises(ValueError, match="must be positive"):
            TierConfig("zero", timedelta(0))

    def test_to_dict(self):
        assert TierConfig("5m", timedelta(minutes=5)).to_dict() == {"name": "5m", "duration_ms": 300000}


class TestCandelabra:
    """Tests for Candelabra accessors."""

    def test_tier_lookup(self, intraday):
        state = create(at(0, 2), intraday)

        assert state.tier("15m") is state.tiers[2]

    def test_unknown_tier(self, intraday):
        state = create(at(0, 2), intraday)

        with pytest.raises(KeyError, match="Available tiers: 1m, 5m, 15m, 1h"):
            state.tier("4h")

    def test_latest(self, one_minute):
        state = ingest(at(30, 4), create(at(0, 2), one_minute))

        assert state.latest == at(30, 4)

    def test_to_dict(self, one_minute):
        state = ingest(at(61, 6), create(at(0, 2), one_minute))

        data = state.to_dict()

        assert data["samples"] == [at(61, 6).to_dict()]
        assert data["tiers"][0]["name"] == "1m"
        assert data["tiers"][0]["duration_ms"] == 60000
        assert len(data["tiers"][0]["history"]) == 1
        assert data["eternal"]["high"] == 6
        json.dumps(data)

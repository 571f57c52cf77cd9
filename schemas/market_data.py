"""
Market Data Types

Core value types flowing through the candelabra engine.
Samples are raw observations; candlesticks summarize a span of them.
Both are immutable: every engine operation returns new instances.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import json


def parse_timestamp(value) -> datetime:
    """Parse an ISO 8601 string or epoch milliseconds into a datetime"""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    raise ValueError(f"Unsupported timestamp: {value!r}")


@dataclass(frozen=True)
class Sample:
    """A single timestamped numeric observation"""
    timestamp: datetime
    value: float

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "timestamp": self.timestamp.isoformat(),
            "value": self.value,
        }

    def to_json(self) -> str:
        """Serialize to JSON string"""
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "Sample":
        """Create Sample from dictionary"""
        return cls(
            timestamp=parse_timestamp(data["timestamp"]),
            value=float(data["value"]),
        )

    @classmethod
    def from_json(cls, json_str: str) -> "Sample":
        """Deserialize from JSON string"""
        return cls.from_dict(json.loads(json_str))


@dataclass(frozen=True)
class Candlestick:
    """OHLC + mean summary over the span [open_at, close_at]"""
    open: float
    close: float
    high: float
    low: float
    mean: float
    open_at: datetime
    close_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "open": self.open,
            "close": self.close,
            "high": self.high,
            "low": self.low,
            "mean": self.mean,
            "open_at": self.open_at.isoformat(),
            "close_at": self.close_at.isoformat(),
        }

    def to_json(self) -> str:
        """Serialize to JSON string"""
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "Candlestick":
        """Create Candlestick from dictionary"""
        return cls(
            open=float(data["open"]),
            close=float(data["close"]),
            high=float(data["high"]),
            low=float(data["low"]),
            mean=float(data["mean"]),
            open_at=parse_timestamp(data["open_at"]),
            close_at=parse_timestamp(data["close_at"]),
        )

    @classmethod
    def from_json(cls, json_str: str) -> "Candlestick":
        """Deserialize from JSON string"""
        return cls.from_dict(json.loads(json_str))

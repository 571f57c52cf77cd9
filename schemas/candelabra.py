"""
Candelabra Types

Tier configuration, tier state and the aggregate root.
These are the types returned to callers after every ingestion.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple

from .market_data import Candlestick, Sample


@dataclass(frozen=True)
class TierConfig:
    """One aggregation resolution, e.g. TierConfig("5m", timedelta(minutes=5))"""
    name: str
    duration: timedelta

    def __post_init__(self):
        if self.duration <= timedelta(0):
            raise ValueError(
                f"Tier '{self.name}' duration must be positive, got {self.duration}"
            )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "duration_ms": int(self.duration / timedelta(milliseconds=1)),
        }


@dataclass(frozen=True)
class Tier:
    """
    A tier's configuration together with its open bucket and closed buckets.

    history is chronological; current is the in-progress bucket whose
    close_at tracks the newest sample it absorbed.

    current is rebuildable from base plus the buffered samples at or after
    since. base holds what the open bucket absorbed before that (None when
    nothing); since is None for tiers built by hand, meaning current.open_at.
    """
    name: str
    duration: timedelta
    current: Candlestick
    history: Tuple[Candlestick, ...] = ()
    base: Optional[Candlestick] = None
    since: Optional[datetime] = None

    @property
    def config(self) -> TierConfig:
        return TierConfig(name=self.name, duration=self.duration)

    def to_dict(self) -> dict:
        return {
            **self.config.to_dict(),
            "current": self.current.to_dict(),
            "history": [c.to_dict() for c in self.history],
        }


@dataclass(frozen=True)
class Candelabra:
    """
    Aggregate root: sample buffer, tiers (finest first) and the all-time candlestick.

    Attributes:
        samples: Time-ascending samples with unique timestamps, pruned to what
                 the finest tier's current bucket still needs
        tiers: Tier states ordered finest -> coarsest
        eternal: Merge of every sample ever ingested
        settled: Merge of every bucket the coarsest tier has closed, None until
                 its first overflow
    """
    samples: Tuple[Sample, ...]
    tiers: Tuple[Tier, ...]
    eternal: Candlestick
    settled: Optional[Candlestick] = None

    @property
    def latest(self) -> Optional[Sample]:
        return self.samples[-1] if self.samples else None

    def tier(self, name: str) -> Tier:
        """Look up a tier by name"""
        for tier in self.tiers:
            if tier.name == name:
                return tier
        available = ", ".join(t.name for t in self.tiers)
        raise KeyError(f"Unknown tier: {name}. Available tiers: {available}")

    def to_dict(self) -> dict:
        """Convert to dictionary for reporting collaborators"""
        return {
            "samples": [s.to_dict() for s in self.samples],
            "tiers": [t.to_dict() for t in self.tiers],
            "eternal": self.eternal.to_dict(),
        }

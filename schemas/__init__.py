"""
Candelabra - Typed Value Catalog

All state flowing through the engine uses these immutable value types.
"""

from schemas.market_data import Sample, Candlestick, parse_timestamp
from schemas.candelabra import TierConfig, Tier, Candelabra

__all__ = [
    "Sample",
    "Candlestick",
    "parse_timestamp",
    "TierConfig",
    "Tier",
    "Candelabra",
]

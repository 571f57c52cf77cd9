"""
Candelabra Engine

Multi-resolution candlestick aggregation over a stream of timestamped samples.
"""

from .candelabra import create, ingest, ingest_batch
from .config import parse_granularity, parse_granularities, ConfigLoader, CandelabraConfig
from .errors import (
    CandelabraError,
    EmptyInputError,
    GranularityError,
    InvalidGranularityFormat,
    NonDivisibleGranularity,
)
from .runtime import CandelabraCoordinator

__all__ = [
    "create",
    "ingest",
    "ingest_batch",
    "parse_granularity",
    "parse_granularities",
    "ConfigLoader",
    "CandelabraConfig",
    "CandelabraError",
    "EmptyInputError",
    "GranularityError",
    "InvalidGranularityFormat",
    "NonDivisibleGranularity",
    "CandelabraCoordinator",
]

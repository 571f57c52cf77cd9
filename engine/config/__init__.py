"""
Config Module

Granularity parsing and YAML/environment candelabra configuration.
"""

from .granularity import parse_granularity, parse_granularities
from .loader import ConfigLoader, CandelabraConfig

__all__ = [
    "parse_granularity",
    "parse_granularities",
    "ConfigLoader",
    "CandelabraConfig",
]

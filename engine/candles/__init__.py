"""
Candles Module

Candlestick construction and merge algebra.
"""

from .algebra import (
    from_sample,
    merge,
    samples_to_candlestick,
    historize,
    gap_fill,
)

__all__ = [
    "from_sample",
    "merge",
    "samples_to_candlestick",
    "historize",
    "gap_fill",
]

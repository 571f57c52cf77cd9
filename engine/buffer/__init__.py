"""
Buffer Module

Deduplicated, ordered, pruned sample buffer.
"""

from .samples import cutoff, is_late, find, upsert, prune

__all__ = [
    "cutoff",
    "is_late",
    "find",
    "upsert",
    "prune",
]

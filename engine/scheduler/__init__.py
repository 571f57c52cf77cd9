"""
Scheduler Module

Finest-to-coarsest tier cascade and post-cascade history pruning.
"""

from .cascade import CascadeResult, cascade, revise, anchor, eternal_for
from .pruning import prune_history

__all__ = [
    "CascadeResult",
    "cascade",
    "revise",
    "anchor",
    "eternal_for",
    "prune_history",
]

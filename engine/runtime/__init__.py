"""
Runtime Module

Per-symbol candelabra coordination.
"""

from .coordinator import CandelabraCoordinator

__all__ = [
    "CandelabraCoordinator",
]

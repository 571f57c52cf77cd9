"""
History Pruning

Post-cascade pass bounding tier history. A tier only keeps the closed
buckets the next coarser tier's open bucket still spans; the coarsest tier is
left alone (its history is replaced on every overflow).
"""

from dataclasses import replace
from typing import Sequence, Tuple
import logging

from schemas.candelabra import Tier
from ..errors import require_non_empty

logger = logging.getLogger(__name__)


def prune_history(tiers: Sequence[Tier]) -> Tuple[Tier, ...]:
    """
    Drop history entries that close at or before the next coarser tier's open bucket.

    Args:
        tiers: Tier states, finest first

    Returns:
        Tier states with bounded history
    """
    require_non_empty(tiers, "tiers")
    pruned = []

    for tier, coarser in zip(tiers, tiers[1:]):
        needed_from = coarser.current.open_at
        history = tuple(c for c in tier.history if c.close_at > needed_from)

        if len(history) != len(tier.history):
            logger.debug(
                f"Tier {tier.name}: pruned {len(tier.history) - len(history)} "
                f"history entries before {needed_from.isoformat()}"
            )
            tier = replace(tier, history=history)

        pruned.append(tier)

    pruned.append(tiers[-1])
    return tuple(pruned)

"""
Sample Buffer

Keeps the raw samples needed to rebuild the finest tier's open bucket.

Purpose:
- Reject samples that arrive too late to matter
- Upsert by timestamp (last write wins, never two samples at one instant)
- Stay chronologically ordered
- Forget everything older than the finest tier's open bucket

Buffers are tuples; every operation returns a new one.
"""

from datetime import datetime
from typing import Optional, Sequence, Tuple
import logging

from schemas.market_data import Sample
from schemas.candelabra import Tier
from ..errors import require_non_empty

logger = logging.getLogger(__name__)

Samples = Tuple[Sample, ...]


def cutoff(latest: Sample, tiers: Sequence[Tier]) -> datetime:
    """Earliest timestamp still accepted: latest sample minus the finest tier's duration"""
    require_non_empty(tiers, "tiers")
    return latest.timestamp - tiers[0].duration


def is_late(sample: Sample, samples: Sequence[Sample], tiers: Sequence[Tier]) -> bool:
    """
    Check whether a sample falls before the acceptance window.

    Args:
        sample: Incoming sample
        samples: Current non-empty buffer
        tiers: Tier states (finest first)

    Returns:
        True if the sample is strictly earlier than the cutoff
    """
    require_non_empty(samples, "sample buffer")
    return sample.timestamp < cutoff(samples[-1], tiers)


def find(samples: Sequence[Sample], timestamp: datetime) -> Optional[Sample]:
    """Buffered sample at exactly this timestamp, if any"""
    for sample in samples:
        if sample.timestamp == timestamp:
            return sample
    return None


def upsert(sample: Sample, samples: Sequence[Sample]) -> Samples:
    """
    Insert a sample, replacing any sample with an identical timestamp.

    Returns:
        New buffer sorted ascending by timestamp
    """
    replaced = False
    updated = []

    for existing in samples:
        if existing.timestamp == sample.timestamp:
            updated.append(sample)
            replaced = True
        else:
            updated.append(existing)

    if replaced:
        logger.debug(f"Upserted sample at {sample.timestamp.isoformat()}: value={sample.value}")
    else:
        updated.append(sample)

    return tuple(sorted(updated, key=lambda s: s.timestamp))


def prune(samples: Sequence[Sample], open_at: datetime) -> Samples:
    """
    Drop every sample strictly older than open_at.

    Args:
        samples: Sorted buffer
        open_at: The finest tier's current bucket start

    Returns:
        Remaining samples (still sorted)
    """
    kept = tuple(s for s in samples if s.timestamp >= open_at)

    dropped = len(samples) - len(kept)
    if dropped:
        logger.debug(f"Pruned {dropped} samples older than {open_at.isoformat()}")

    return kept

"""
Tier Cascade

Runs the newest buffered sample through every tier, finest -> coarsest.

For each tier the distance from the tier's anchor to the newest sample
decides between:

- partial:  the open bucket absorbs the sample
- overflow: the open bucket is frozen into history (with flat gap-fill
            buckets for periods that saw no samples) and a new bucket opens
            at the sample

The coarsest tier is the leaf: it replaces its history on overflow, snaps its
new bucket to the last closed boundary, and feeds the all-time candlestick.
Every other tier is a branch: it appends to its history and opens its new
bucket exactly at the sample.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple
import logging

from schemas.market_data import Candlestick, Sample
from schemas.candelabra import Tier
from ..candles.algebra import from_sample, gap_fill, historize, merge
from ..errors import require_non_empty

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CascadeResult:
    """Tier states, all-time candlestick and settled leaf buckets after one cascade"""
    tiers: Tuple[Tier, ...]
    eternal: Candlestick
    settled: Optional[Candlestick] = None


def anchor(tier: Tier, oldest: Sample) -> datetime:
    """
    Instant the tier measures its distance from.

    The last closed bucket's close_at when there is history; otherwise the
    earlier of the oldest buffered sample and the open bucket's start.
    """
    if tier.history:
        return tier.history[-1].close_at
    return min(oldest.timestamp, tier.current.open_at)


def eternal_for(leaf_current: Candlestick, settled: Optional[Candlestick]) -> Candlestick:
    """All-time candlestick: settled leaf buckets plus the leaf's open bucket"""
    if settled is None:
        return leaf_current
    return merge([settled, leaf_current])


def _overflow(
    tier: Tier, point: Candlestick, distance: timedelta, is_leaf: bool
) -> Tier:
    frozen = historize(tier.current, tier.duration)
    closed = gap_fill(frozen, tier.duration, distance)

    logger.debug(
        f"Tier {tier.name}: overflow by {distance}, closing {len(closed)} buckets "
        f"({'leaf' if is_leaf else 'branch'})"
    )

    if is_leaf:
        return replace(
            tier,
            history=tuple(closed),
            current=replace(point, open_at=closed[-1].close_at),
            base=None,
            since=point.open_at,
        )

    return replace(
        tier,
        history=tier.history + tuple(closed),
        current=point,
        base=None,
        since=point.open_at,
    )


def cascade(
    tiers: Sequence[Tier],
    samples: Sequence[Sample],
    settled: Optional[Candlestick] = None,
) -> CascadeResult:
    """
    Cascade the buffer's newest sample through all tiers.

    Args:
        tiers: Tier states, finest first (order is trusted, never re-sorted)
        samples: Sorted, non-empty sample buffer already containing the sample
        settled: Merge of the leaf's closed buckets so far

    Returns:
        CascadeResult with new tiers, eternal and settled

    Raises:
        EmptyInputError: If tiers or samples is empty
    """
    require_non_empty(tiers, "tiers")
    require_non_empty(samples, "sample buffer")

    newest, oldest = samples[-1], samples[0]
    point = from_sample(newest)
    leaf_index = len(tiers) - 1

    processed: List[Tier] = []
    eternal = point
    finest_restarted = False

    for index, tier in enumerate(tiers):
        is_leaf = index == leaf_index
        distance = newest.timestamp - anchor(tier, oldest)

        if distance <= tier.duration:
            if finest_restarted:
                # base covers everything before the new finest bucket
                tier = replace(tier, base=tier.current, since=newest.timestamp)
            tier = replace(tier, current=merge([tier.current, point]))
            logger.debug(f"Tier {tier.name}: partial update, distance {distance}")
            if is_leaf:
                eternal = eternal_for(tier.current, settled)
        else:
            if is_leaf:
                # pre-freeze bucket, not the historized copy
                settled = eternal_for(tier.current, settled)
                eternal = merge([settled, point])
            tier = _overflow(tier, point, distance, is_leaf)
            if index == 0:
                finest_restarted = True

        processed.append(tier)

    return CascadeResult(tiers=tuple(processed), eternal=eternal, settled=settled)


def _rebuild(tier: Tier, samples: Sequence[Sample]) -> Candlestick:
    """Open bucket recomputed from its base and the buffered samples it counts"""
    since = tier.since or tier.current.open_at
    parts = [from_sample(s) for s in samples if s.timestamp >= since]
    if tier.base is not None:
        parts.insert(0, tier.base)
    return replace(merge(parts), open_at=tier.current.open_at)


def revise(
    tiers: Sequence[Tier],
    samples: Sequence[Sample],
    sample: Sample,
    settled: Optional[Candlestick] = None,
) -> CascadeResult:
    """
    Absorb a sample that is not newer than everything already buffered.

    Upserts and in-window out-of-order samples never close buckets. Every
    open bucket is rebuilt from its base and the buffer, so a replaced value
    disappears and close/close_at stay with the newest sample. A sample older
    than a tier's buffered part is folded into that tier's base while the
    open bucket still spans it. One older than the leaf's open bucket is
    folded into settled; closed history is never rewritten.

    Args:
        tiers: Tier states, finest first
        samples: Sorted buffer after the upsert
        sample: The revising sample
        settled: Merge of the leaf's closed buckets so far

    Returns:
        CascadeResult with new tiers, eternal and settled
    """
    require_non_empty(tiers, "tiers")
    require_non_empty(samples, "sample buffer")

    point = from_sample(sample)
    leaf_index = len(tiers) - 1
    processed: List[Tier] = []

    for index, tier in enumerate(tiers):
        if index == 0:
            tier = replace(tier, since=tier.current.open_at, base=None)
        elif sample.timestamp < (tier.since or tier.current.open_at):
            if sample.timestamp >= tier.current.open_at:
                base = point if tier.base is None else merge([tier.base, point])
                tier = replace(tier, base=base)

        if index == leaf_index and sample.timestamp < tier.current.open_at:
            settled = point if settled is None else merge([settled, point])
            logger.debug(f"Tier {tier.name}: folded sample before open bucket into settled")

        current = _rebuild(tier, samples)
        logger.debug(f"Tier {tier.name}: rebuilt open bucket at {current.open_at.isoformat()}")
        processed.append(replace(tier, current=current))

    eternal = eternal_for(processed[-1].current, settled)
    return CascadeResult(tiers=tuple(processed), eternal=eternal, settled=settled)

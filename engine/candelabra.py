"""
Candelabra

Aggregate root of the engine and its single ingestion entry point.

Each call is a pure state transition: an old Candelabra and a sample in, a
new Candelabra out. Callers that share a lineage of states across threads
must serialize writes themselves (see engine.runtime.coordinator).

Example usage:
    tiers = parse_granularities(["1m", "5m", "1h"])
    state = create(Sample(t0, 2.0), tiers)
    state = ingest(Sample(t0 + timedelta(seconds=30), 4.0), state)

    state.tiers[0].current   # open 1m bucket
    state.tiers[0].history   # closed 1m buckets
    state.eternal            # all-time candlestick
"""

from dataclasses import replace
from typing import Sequence
import logging

from schemas.market_data import Sample
from schemas.candelabra import Candelabra, Tier, TierConfig
from .buffer import samples as buffer
from .candles.algebra import from_sample
from .errors import require_non_empty
from .scheduler.cascade import cascade, revise
from .scheduler.pruning import prune_history

logger = logging.getLogger(__name__)


def create(seed: Sample, tier_configs: Sequence[TierConfig]) -> Candelabra:
    """
    Build a Candelabra from a seed sample.

    Args:
        seed: First sample
        tier_configs: Tier configurations, finest duration first

    Returns:
        Candelabra whose every tier's open bucket (and eternal) is the seed

    Raises:
        EmptyInputError: If tier_configs is empty
    """
    require_non_empty(tier_configs, "tier configs")
    candlestick = from_sample(seed)

    tiers = tuple(
        Tier(
            name=config.name,
            duration=config.duration,
            current=candlestick,
            since=seed.timestamp,
        )
        for config in tier_configs
    )

    logger.debug(
        f"Created candelabra at {seed.timestamp.isoformat()} "
        f"with tiers: {[t.name for t in tiers]}"
    )

    return Candelabra(samples=(seed,), tiers=tiers, eternal=candlestick)


def _reseed(sample: Sample, state: Candelabra) -> Candelabra:
    """Restart an empty-buffer state from a sample, keeping its tier configuration"""
    return create(sample, [tier.config for tier in state.tiers])


def ingest(sample: Sample, state: Candelabra) -> Candelabra:
    """
    Ingest one sample.

    1. Bootstrap from the sample if the buffer is empty
    2. Drop the sample if it is older than the acceptance cutoff
    3. Ignore an exact duplicate of a buffered sample
    4. Upsert into the buffer
    5. Cascade through the tiers (or revise them for out-of-order/upserted samples)
    6. Prune tier history, then prune the buffer to the finest open bucket

    Args:
        sample: Incoming sample
        state: Current Candelabra

    Returns:
        New Candelabra, or state itself when the sample is dropped or a duplicate
    """
    if not state.samples:
        return _reseed(sample, state)

    if buffer.is_late(sample, state.samples, state.tiers):
        logger.debug(
            f"Dropped late sample at {sample.timestamp.isoformat()} "
            f"(cutoff {buffer.cutoff(state.samples[-1], state.tiers).isoformat()})"
        )
        return state

    existing = buffer.find(state.samples, sample.timestamp)
    if existing == sample:
        logger.debug(f"Ignored duplicate sample at {sample.timestamp.isoformat()}")
        return state

    latest = state.samples[-1]
    samples = buffer.upsert(sample, state.samples)

    if sample.timestamp > latest.timestamp:
        result = cascade(state.tiers, samples, state.settled)
    else:
        result = revise(state.tiers, samples, sample, state.settled)

    tiers = prune_history(result.tiers)
    samples = buffer.prune(samples, tiers[0].current.open_at)

    return replace(
        state,
        samples=samples,
        tiers=tiers,
        eternal=result.eternal,
        settled=result.settled,
    )


def ingest_batch(samples: Sequence[Sample], state: Candelabra) -> Candelabra:
    """
    Ingest samples one by one in the given order (not re-sorted).

    Raises:
        EmptyInputError: If samples is empty
    """
    require_non_empty(samples, "samples")

    for sample in samples:
        state = ingest(sample, state)

    return state

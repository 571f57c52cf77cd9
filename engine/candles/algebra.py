"""
Candlestick Algebra

Pure functions over candlesticks: build one from a sample, merge many into
one, freeze a bucket to its nominal width and synthesize flat buckets for
periods that received no samples.
"""

from dataclasses import replace
from datetime import timedelta
from typing import List, Sequence

from schemas.market_data import Candlestick, Sample
from ..errors import require_non_empty

ONE_MS = timedelta(milliseconds=1)


def from_sample(sample: Sample) -> Candlestick:
    """Degenerate one-point candlestick"""
    return Candlestick(
        open=sample.value,
        close=sample.value,
        high=sample.value,
        low=sample.value,
        mean=sample.value,
        open_at=sample.timestamp,
        close_at=sample.timestamp,
    )


def _mean(ordered: Sequence[Candlestick]) -> float:
    """
    Mean of an open_at-ordered, non-empty candlestick list.

    The sum of the leading means is divided by their elapsed span in ms and
    averaged with the last mean. This is not a duration-weighted average and
    is not associative; existing consumers depend on the exact values.
    """
    if len(ordered) == 1:
        return ordered[0].mean

    init, last = ordered[:-1], ordered[-1]
    span = (init[-1].close_at - init[0].open_at) / ONE_MS
    if span == 0:
        span = 1
    weighted_init = sum(c.mean for c in init) / span
    return (weighted_init + last.mean) / 2


def merge(candlesticks: Sequence[Candlestick]) -> Candlestick:
    """
    Reduce a non-empty collection of candlesticks into one.

    Input order does not matter: the list is sorted by open_at first (stable,
    so ties keep their call-site order).

    Raises:
        EmptyInputError: If candlesticks is empty
    """
    require_non_empty(candlesticks, "candlesticks to merge")
    ordered = sorted(candlesticks, key=lambda c: c.open_at)
    first, last = ordered[0], ordered[-1]

    return Candlestick(
        open=first.open,
        close=last.close,
        high=max(c.high for c in ordered),
        low=min(c.low for c in ordered),
        mean=_mean(ordered),
        open_at=first.open_at,
        close_at=last.close_at,
    )


def samples_to_candlestick(samples: Sequence[Sample]) -> Candlestick:
    """Merge the one-point candlesticks of a non-empty sample sequence"""
    require_non_empty(samples, "samples")
    return merge([from_sample(s) for s in samples])


def historize(candlestick: Candlestick, duration: timedelta) -> Candlestick:
    """Freeze a bucket: close_at becomes open_at + duration"""
    return replace(candlestick, close_at=candlestick.open_at + duration)


def gap_fill(
    frozen: Candlestick, duration: timedelta, distance: timedelta
) -> List[Candlestick]:
    """
    Expand a frozen bucket into the closed buckets covering `distance`.

    n = floor(distance / duration). For n > 1 the frozen bucket is followed
    by n - 1 flat copies of its prices, each exactly one duration wide and
    laid end to end from frozen.open_at + duration.

    Example (1m buckets, distance 3m):
        [frozen 00:00-00:01, flat 00:01-00:02, flat 00:02-00:03]

    Args:
        frozen: Historized candlestick (see historize)
        duration: Tier bucket width
        distance: Span from the tier's anchor to the newest sample

    Returns:
        Chronological list starting with frozen
    """
    closed = [frozen]
    periods = distance // duration
    anchor = frozen.open_at

    for i in range(1, periods):
        closed.append(
            replace(
                frozen,
                open_at=anchor + i * duration,
                close_at=anchor + (i + 1) * duration,
            )
        )

    return closed

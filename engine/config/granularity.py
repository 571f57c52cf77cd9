"""
Granularity Parsing

Turns strings like "1m", "15m", "2h", "1d" into tier configurations.
Minute and hour amounts must divide their natural cycle (60 and 24) so that
buckets tile an hour or a day evenly.
"""

from datetime import timedelta
from typing import Iterable, List
import re

from schemas.candelabra import TierConfig
from ..errors import InvalidGranularityFormat, NonDivisibleGranularity

GRANULARITY_PATTERN = re.compile(r"^(\d+)([mhd])$")

# unit -> (timedelta keyword, cycle the amount must divide; None = any)
UNITS = {
    "m": ("minutes", 60),
    "h": ("hours", 24),
    "d": ("days", None),
}


def parse_granularity(granularity: str) -> TierConfig:
    """
    Parse a granularity string into a TierConfig named after it.

    Args:
        granularity: e.g. "5m", "2h", "1d"

    Returns:
        TierConfig(name=granularity, duration=...)

    Raises:
        InvalidGranularityFormat: If the string is not <positive integer><m|h|d>
        NonDivisibleGranularity: If a minute/hour amount does not divide 60/24
    """
    match = GRANULARITY_PATTERN.match(granularity)
    if not match:
        raise InvalidGranularityFormat(
            f'Invalid granularity format: "{granularity}". '
            f'Expected format like "1m", "5m", "2h", "5d"'
        )

    amount = int(match.group(1))
    unit = match.group(2)
    keyword, cycle = UNITS[unit]

    if amount <= 0:
        raise InvalidGranularityFormat(
            f'Invalid granularity: "{granularity}". Amount must be a positive integer'
        )

    if cycle is not None and cycle % amount != 0:
        valid = [n for n in range(1, cycle) if cycle % n == 0]
        raise NonDivisibleGranularity(
            f'Invalid {keyword[:-1]} granularity: "{granularity}". '
            f"{amount} does not divide evenly into {cycle} {keyword}. "
            f"Valid values: {', '.join(str(n) for n in valid)}"
        )

    return TierConfig(name=granularity, duration=timedelta(**{keyword: amount}))


def parse_granularities(granularities: Iterable[str]) -> List[TierConfig]:
    """Parse a list of granularity strings, preserving order"""
    return [parse_granularity(g) for g in granularities]

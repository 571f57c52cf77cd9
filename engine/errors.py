"""
Engine Errors

Failures are confined to construction and configuration. The ingestion path
is total: late samples and duplicate timestamps are defined no-ops/upserts,
not errors.
"""

from typing import Sequence, TypeVar

T = TypeVar("T")


class CandelabraError(Exception):
    """Base class for candelabra errors"""


class EmptyInputError(CandelabraError, ValueError):
    """A collection the engine requires to be non-empty was empty (caller bug)"""


class GranularityError(CandelabraError, ValueError):
    """Base class for granularity parsing failures"""


class InvalidGranularityFormat(GranularityError):
    """Granularity string does not match <positive integer><m|h|d>"""


class NonDivisibleGranularity(GranularityError):
    """Granularity amount does not evenly divide its unit's natural cycle"""


def require_non_empty(items: Sequence[T], what: str) -> Sequence[T]:
    """
    Enforce a non-empty invariant at an entry point.

    Args:
        items: Collection to check
        what: Name used in the error message

    Returns:
        items unchanged

    Raises:
        EmptyInputError: If items is empty
    """
    if not items:
        raise EmptyInputError(f"{what} must not be empty")
    return items

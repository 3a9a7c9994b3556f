"""Splitting record sets to fit per-file import limits."""

from collections.abc import Sequence
from typing import TypeVar

from timeline_converter.constants import MAX_RECORDS_PER_CHUNK

T = TypeVar("T")


def chunk_records(
    records: Sequence[T],
    enabled: bool = True,
    size: int = MAX_RECORDS_PER_CHUNK,
) -> list[list[T]]:
    """
    Split records into consecutive slices of at most ``size`` items.

    Only splits when enabled and the set is larger than ``size``; otherwise
    the whole set comes back as a single chunk (even when empty).

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")

    if not enabled or len(records) <= size:
        return [list(records)]

    return [list(records[start : start + size]) for start in range(0, len(records), size)]

"""
Record cleaning: activity removal and duplicate merging.

Deduplication runs in two passes over PlaceVisit records:

1. Group by trimmed placeId. Records without one are left alone.
2. Group the survivors (plus everything set aside) by exact E7 coordinate.

In each group a single survivor is kept: the first record with a non-blank
address, else the first record. Survivors stay at their original position,
so the output order is always a subsequence of the input order.
ActivitySegment records are never grouped with anything.
"""

import logging

from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass

from timeline_converter.models.results import CleaningStats, ProcessingOptions
from timeline_converter.models.timeline import TimelineRecord

logger = logging.getLogger(__name__)

# Key function result: None means "not groupable, keep as-is"
GroupKey = Callable[[int, TimelineRecord], Hashable | None]


@dataclass(frozen=True)
class CleanResult:
    """Cleaned records plus bookkeeping for a clean_records() call."""

    records: list[TimelineRecord]
    stats: CleaningStats
    original_count: int
    after_activity_removal: int

    @property
    def final_count(self) -> int:
        return len(self.records)


def remove_activity_records(
    records: Sequence[TimelineRecord],
) -> tuple[list[TimelineRecord], int]:
    """
    Keep only PlaceVisit records.

    Returns:
        (visits, number of records removed)
    """
    visits = [record for record in records if record.is_visit]
    return visits, len(records) - len(visits)


def _select_survivor(indexes: list[int], records: Sequence[TimelineRecord]) -> int:
    """Pick the index to keep from a group of duplicate indexes."""
    for index in indexes:
        visit = records[index].place_visit
        if visit is not None and visit.location.has_address:
            return index
    return indexes[0]


def _merge_groups(
    records: Sequence[TimelineRecord], key_func: GroupKey
) -> list[TimelineRecord]:
    """Collapse each key group to its survivor, preserving input order."""
    groups: dict[Hashable, list[int]] = {}
    keep: set[int] = set()

    for index, record in enumerate(records):
        key = key_func(index, record)
        if key is None:
            keep.add(index)
        else:
            groups.setdefault(key, []).append(index)

    for indexes in groups.values():
        keep.add(indexes[0] if len(indexes) == 1 else _select_survivor(indexes, records))

    return [record for index, record in enumerate(records) if index in keep]


def place_id_key(index: int, record: TimelineRecord) -> Hashable | None:
    """Group PlaceVisits by trimmed placeId; everything else is unkeyed."""
    visit = record.place_visit
    if visit is None or not visit.location.place_id:
        return None
    place_id = visit.location.place_id.strip()
    return place_id or None


def coordinate_key(index: int, record: TimelineRecord) -> Hashable:
    """
    Group PlaceVisits by exact E7 coordinate.

    Non-visit records get a key built from their own position, which can
    never collide with a coordinate key or with another record's key.
    """
    visit = record.place_visit
    if visit is None:
        return ("ungroupable", index)
    return ("coordinate", visit.location.coordinate_key)


def deduplicate_records(
    records: Sequence[TimelineRecord],
) -> tuple[list[TimelineRecord], int]:
    """
    Run both deduplication passes.

    Returns:
        (deduplicated records, number of records removed)
    """
    by_place_id = _merge_groups(records, place_id_key)
    by_coordinate = _merge_groups(by_place_id, coordinate_key)

    logger.debug(
        f"Deduplication: {len(records)} -> {len(by_place_id)} (placeId) "
        f"-> {len(by_coordinate)} (coordinate)"
    )
    return by_coordinate, len(records) - len(by_coordinate)


def clean_records(
    records: Sequence[TimelineRecord], options: ProcessingOptions
) -> CleanResult:
    """
    Apply the enabled cleaning steps to a record set.

    The input is not modified; a new list is always returned.

    Args:
        records: Combined records from every input file, in processing order
        options: Which cleaning steps to run

    Returns:
        CleanResult with the cleaned records and removal counts
    """
    cleaned = list(records)
    removed_activities = 0
    removed_duplicates = 0

    if options.remove_activities:
        cleaned, removed_activities = remove_activity_records(cleaned)
        logger.info(f"Removed {removed_activities} activity records")

    after_activity_removal = len(cleaned)

    if options.remove_duplicates:
        cleaned, removed_duplicates = deduplicate_records(cleaned)
        logger.info(f"Removed {removed_duplicates} duplicate records")

    return CleanResult(
        records=cleaned,
        stats=CleaningStats(
            removed_activities=removed_activities,
            removed_duplicates=removed_duplicates,
        ),
        original_count=len(records),
        after_activity_removal=after_activity_removal,
    )

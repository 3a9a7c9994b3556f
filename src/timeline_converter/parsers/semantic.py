"""
Shared conversion for semantic-segment exports.

Both on-device Timeline exports (the iOS segment array and the Android
``semanticSegments`` object) describe each segment with one of three
markers: ``visit``, ``activity`` or ``timelinePath``. The two dialects differ
in where the segment list lives and in small spelling details (``placeID``
vs ``placeId``, ``geo:`` strings vs ``{"latLng": ...}`` objects, numbers
as strings), all of which are accepted here.
"""

import logging

from abc import abstractmethod
from collections.abc import Iterator
from typing import Any

from timeline_converter.constants import (
    END_TIME_KEYS,
    PLACE_ID_KEYS,
    SEGMENT_ACTIVITY,
    SEGMENT_TIMELINE_PATH,
    SEGMENT_VISIT,
    SEMANTIC_TYPE_UNKNOWN,
    START_TIME_KEYS,
)
from timeline_converter.models.timeline import (
    ActivitySegment,
    ActivityType,
    Duration,
    Location,
    PlaceVisit,
    TimelineRecord,
)
from timeline_converter.parsers.base import DialectParser
from timeline_converter.parsers.coordinates import parse_lat_lng
from timeline_converter.parsers.types import DiagnosticLog
from timeline_converter.utils.numbers import round_half_up, to_float

logger = logging.getLogger(__name__)


def _first_present(mapping: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if mapping.get(key) is not None:
            return mapping[key]
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _as_mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def segment_kind(segment: Any) -> str | None:
    """Return the shape marker of a segment, or None if it has none we know."""
    if not isinstance(segment, dict):
        return None
    for kind in (SEGMENT_VISIT, SEGMENT_ACTIVITY, SEGMENT_TIMELINE_PATH):
        if segment.get(kind) is not None:
            return kind
    return None


def segment_duration(segment: dict[str, Any]) -> Duration:
    """Build a Duration from whichever start/end field names the segment uses."""
    return Duration(
        start_timestamp=_text(_first_present(segment, START_TIME_KEYS)),
        end_timestamp=_text(_first_present(segment, END_TIME_KEYS)),
    )


def convert_visit(segment: dict[str, Any]) -> TimelineRecord:
    """Convert a ``visit`` segment into a PlaceVisit record."""
    visit = _as_mapping(segment[SEGMENT_VISIT])
    candidate = _as_mapping(visit.get("topCandidate"))
    place_location = candidate.get("placeLocation")
    place_details = _as_mapping(place_location)

    coordinate = parse_lat_lng(place_location)
    confidence = round_half_up(to_float(visit.get("probability")) * 100)

    location = Location(
        latitude_e7=coordinate.latitude_e7,
        longitude_e7=coordinate.longitude_e7,
        place_id=_text(_first_present(candidate, PLACE_ID_KEYS)),
        name=_text(place_details.get("name")),
        address=_text(place_details.get("address")),
        semantic_type=_text(candidate.get("semanticType")) or SEMANTIC_TYPE_UNKNOWN,
    )
    return TimelineRecord.visit(
        PlaceVisit(
            location=location,
            duration=segment_duration(segment),
            center_lat_e7=coordinate.latitude_e7,
            center_lng_e7=coordinate.longitude_e7,
            visit_confidence=min(100, max(0, confidence)),
        )
    )


def convert_activity(segment: dict[str, Any]) -> TimelineRecord:
    """Convert an ``activity`` segment into an ActivitySegment record."""
    activity = _as_mapping(segment[SEGMENT_ACTIVITY])
    start = parse_lat_lng(activity.get("start"))
    end = parse_lat_lng(activity.get("end"))

    candidate = _as_mapping(activity.get("topCandidate"))
    activities = []
    if candidate.get("type"):
        activities.append(
            ActivityType(
                activity_type=_text(candidate["type"]),
                probability=to_float(candidate.get("probability")),
            )
        )

    return TimelineRecord.activity(
        ActivitySegment(
            start_location=Location(
                latitude_e7=start.latitude_e7, longitude_e7=start.longitude_e7
            ),
            end_location=Location(
                latitude_e7=end.latitude_e7, longitude_e7=end.longitude_e7
            ),
            duration=segment_duration(segment),
            distance=to_float(activity.get("distanceMeters")),
            activities=activities,
        )
    )


def convert_timeline_path(segment: dict[str, Any]) -> TimelineRecord | None:
    """
    Convert a ``timelinePath`` segment into a synthetic ActivitySegment.

    Only the first and last points are kept. An empty path yields None.

    Raises:
        ValueError: If the path is not a list
    """
    path = segment[SEGMENT_TIMELINE_PATH]
    if not isinstance(path, list):
        raise ValueError(f"Expected a list of points, got {type(path).__name__}")
    if not path:
        return None

    def point_of(entry: Any) -> Any:
        return entry.get("point") if isinstance(entry, dict) else entry

    first = parse_lat_lng(point_of(path[0]))
    last = parse_lat_lng(point_of(path[-1]))
    return TimelineRecord.activity(
        ActivitySegment(
            start_location=Location(
                latitude_e7=first.latitude_e7, longitude_e7=first.longitude_e7
            ),
            end_location=Location(
                latitude_e7=last.latitude_e7, longitude_e7=last.longitude_e7
            ),
            duration=segment_duration(segment),
        )
    )


_CONVERTERS = {
    SEGMENT_VISIT: convert_visit,
    SEGMENT_ACTIVITY: convert_activity,
    SEGMENT_TIMELINE_PATH: convert_timeline_path,
}


class SemanticSegmentParser(DialectParser):
    """Base for dialects whose content is a list of semantic segments."""

    @abstractmethod
    def get_segments(self, document: Any) -> list[Any]:
        """Return the segment list from a document accepted by detect()."""
        pass

    def parse_records(
        self, document: Any, log: DiagnosticLog, source: str = "<document>"
    ) -> Iterator[TimelineRecord]:
        segments = self.get_segments(document)
        logger.debug(f"{self.parser_id}: {len(segments)} segments in {source}")

        for index, segment in enumerate(segments):
            kind = segment_kind(segment)
            if kind is None:
                log.skip()
                logger.debug(f"Skipping unrecognized segment {index} in {source}")
                continue

            try:
                record = _CONVERTERS[kind](segment)
            except Exception as e:
                logger.warning(f"Failed to convert {kind} segment {index} in {source}: {e}")
                log.record(source, f"{kind} segment: {e}", segment_index=index)
                continue

            if record is not None:
                yield record

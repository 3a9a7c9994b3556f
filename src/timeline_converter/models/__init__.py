"""Data models for timeline conversion."""

from timeline_converter.models.results import (
    CleaningStats,
    ConversionResult,
    Diagnostic,
    ProcessingOptions,
    RecordCounts,
)
from timeline_converter.models.timeline import (
    ActivitySegment,
    ActivityType,
    Duration,
    Location,
    PlaceVisit,
    RecordSet,
    TimelineRecord,
)

__all__ = [
    "ActivitySegment",
    "ActivityType",
    "CleaningStats",
    "ConversionResult",
    "Diagnostic",
    "Duration",
    "Location",
    "PlaceVisit",
    "ProcessingOptions",
    "RecordCounts",
    "RecordSet",
    "TimelineRecord",
]

"""
Parser for the segment-array Timeline export.

The iOS Timeline export is a bare JSON array of segments. Coordinates are
``geo:`` URI strings, the place identifier is spelled ``placeID`` and most
numbers are written as strings.
"""

from typing import Any

from timeline_converter.parsers.base import ParserDetectionResult
from timeline_converter.parsers.semantic import SemanticSegmentParser
from timeline_converter.parsers.types import Dialect, ParserMetadata


class SegmentArrayParser(SemanticSegmentParser):
    """Parser for documents that are a top-level list of segments."""

    def get_metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="segment_array",
            parser_version="1.0.0",
            dialect=Dialect.SEGMENT_ARRAY,
            source_platform="iOS",
            description="On-device Timeline export (top-level segment array)",
        )

    def detect(self, document: Any) -> ParserDetectionResult:
        if isinstance(document, list):
            return ParserDetectionResult(
                detected=True,
                message="Top-level array of segments",
                segment_count=len(document),
            )
        return ParserDetectionResult(detected=False, message="Not a top-level array")

    def get_segments(self, document: Any) -> list[Any]:
        return list(document)

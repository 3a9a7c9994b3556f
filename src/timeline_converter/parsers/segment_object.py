"""
Parser for the segment-object Timeline export.

The Android Timeline export wraps its segments in ``semanticSegments``.
Coordinates are degree-signed strings, usually nested as
``{"latLng": "40.0°, -75.0°"}``.
"""

from typing import Any

from timeline_converter.constants import SEMANTIC_SEGMENTS_KEY
from timeline_converter.parsers.base import ParserDetectionResult, ParserError
from timeline_converter.parsers.semantic import SemanticSegmentParser
from timeline_converter.parsers.types import Dialect, ParserMetadata


class SegmentObjectParser(SemanticSegmentParser):
    """Parser for ``{"semanticSegments": [...]}`` documents."""

    def get_metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="segment_object",
            parser_version="1.0.0",
            dialect=Dialect.SEGMENT_OBJECT,
            source_platform="Android",
            description="On-device Timeline export (semanticSegments object)",
        )

    def detect(self, document: Any) -> ParserDetectionResult:
        if isinstance(document, dict) and SEMANTIC_SEGMENTS_KEY in document:
            segments = document[SEMANTIC_SEGMENTS_KEY]
            return ParserDetectionResult(
                detected=True,
                message=f"Found '{SEMANTIC_SEGMENTS_KEY}'",
                segment_count=len(segments) if isinstance(segments, list) else 0,
            )
        return ParserDetectionResult(
            detected=False, message=f"No '{SEMANTIC_SEGMENTS_KEY}' key"
        )

    def get_segments(self, document: Any) -> list[Any]:
        segments = document.get(SEMANTIC_SEGMENTS_KEY)
        if segments is None:
            return []
        if not isinstance(segments, list):
            raise ParserError(
                f"'{SEMANTIC_SEGMENTS_KEY}' must be a list, got {type(segments).__name__}",
                parser=self,
            )
        return segments

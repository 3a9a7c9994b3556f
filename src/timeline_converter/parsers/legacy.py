"""
Parser for the legacy ``timelineObjects`` format.

Legacy documents (older Takeout exports, and this tool's own JSON output)
are already in canonical shape. Each object is only validated into a
TimelineRecord - coordinates are taken as-is, never re-derived.
"""

import logging

from collections.abc import Iterator
from typing import Any

from pydantic import ValidationError

from timeline_converter.constants import TIMELINE_OBJECTS_KEY
from timeline_converter.models.timeline import TimelineRecord
from timeline_converter.parsers.base import (
    DialectParser,
    ParserDetectionResult,
    ParserError,
)
from timeline_converter.parsers.types import Dialect, DiagnosticLog, ParserMetadata

logger = logging.getLogger(__name__)

_RECORD_KEYS = ("placeVisit", "activitySegment")


class LegacyTimelineParser(DialectParser):
    """Parser for ``{"timelineObjects": [...]}`` documents."""

    def get_metadata(self) -> ParserMetadata:
        return ParserMetadata(
            parser_id="legacy_timeline",
            parser_version="1.0.0",
            dialect=Dialect.LEGACY,
            source_platform="Takeout",
            description="Legacy timelineObjects format (pass-through)",
        )

    def detect(self, document: Any) -> ParserDetectionResult:
        if isinstance(document, dict) and TIMELINE_OBJECTS_KEY in document:
            objects = document[TIMELINE_OBJECTS_KEY]
            return ParserDetectionResult(
                detected=True,
                message=f"Found '{TIMELINE_OBJECTS_KEY}'",
                segment_count=len(objects) if isinstance(objects, list) else 0,
            )
        return ParserDetectionResult(
            detected=False, message=f"No '{TIMELINE_OBJECTS_KEY}' key"
        )

    def parse_records(
        self, document: Any, log: DiagnosticLog, source: str = "<document>"
    ) -> Iterator[TimelineRecord]:
        objects = document.get(TIMELINE_OBJECTS_KEY)
        if objects is None:
            return
        if not isinstance(objects, list):
            raise ParserError(
                f"'{TIMELINE_OBJECTS_KEY}' must be a list, got {type(objects).__name__}",
                parser=self,
            )

        for index, obj in enumerate(objects):
            if not isinstance(obj, dict) or not any(key in obj for key in _RECORD_KEYS):
                log.skip()
                logger.debug(f"Skipping unrecognized timeline object {index} in {source}")
                continue

            try:
                yield TimelineRecord.model_validate(obj)
            except ValidationError as e:
                logger.warning(f"Invalid timeline object {index} in {source}: {e}")
                log.record(
                    source,
                    f"invalid timeline object: {e.error_count()} validation error(s), "
                    f"first: {e.errors()[0]['msg']}",
                    segment_index=index,
                )

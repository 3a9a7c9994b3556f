"""
Abstract Parser Interface

This module defines the base class that every input dialect parser must
implement, so the pipeline can normalize any supported export without
knowing which platform produced it.

Key Principle: a new export dialect just needs a DialectParser subclass
registered with the registry - detection and conversion pick it up.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from timeline_converter.models.timeline import TimelineRecord
from timeline_converter.parsers.types import Dialect, DiagnosticLog, ParserMetadata


class ParserDetectionResult:
    """Result of checking whether a parser understands a document."""

    def __init__(
        self,
        detected: bool,
        message: str = "",
        segment_count: int = 0,
    ):
        self.detected = detected
        self.message = message
        self.segment_count = segment_count


class DialectParser(ABC):
    """
    Abstract base class for all input dialect parsers.

    Parsers work on already-decoded JSON values. Reading files and handling
    JSON syntax errors is the pipeline's job.

    Usage Example:
        class SegmentArrayParser(DialectParser):
            def detect(self, document):
                return ParserDetectionResult(detected=isinstance(document, list))

            def parse_records(self, document, log, source):
                for segment in document:
                    yield convert(segment)
    """

    def __init__(self) -> None:
        """Initialize the parser."""
        self._metadata = self.get_metadata()

    @abstractmethod
    def get_metadata(self) -> ParserMetadata:
        """
        Return metadata about this parser.

        Example:
            return ParserMetadata(
                parser_id="semantic_segments",
                parser_version="1.0.0",
                dialect=Dialect.SEGMENT_OBJECT,
                source_platform="Android",
                description="Parser for on-device Timeline exports",
            )
        """
        pass

    @abstractmethod
    def detect(self, document: Any) -> ParserDetectionResult:
        """
        Check whether this parser can handle the decoded document.

        Must only look at the top-level shape - no conversion work.

        Args:
            document: Decoded JSON value

        Returns:
            ParserDetectionResult indicating if this parser can handle it
        """
        pass

    @abstractmethod
    def parse_records(
        self, document: Any, log: DiagnosticLog, source: str = "<document>"
    ) -> Iterator[TimelineRecord]:
        """
        Convert the document into canonical records, in document order.

        A segment that fails to convert is recorded in ``log`` and skipped;
        it never stops the remaining segments from being converted.

        Args:
            document: Decoded JSON value accepted by detect()
            log: Collector for per-segment diagnostics
            source: Label used in diagnostics (usually the file name)

        Yields:
            TimelineRecord objects
        """
        pass

    @property
    def metadata(self) -> ParserMetadata:
        """Get parser metadata."""
        return self._metadata

    @property
    def parser_id(self) -> str:
        """Get unique parser identifier."""
        return self._metadata.parser_id

    @property
    def dialect(self) -> Dialect:
        """Get the dialect this parser handles."""
        return self._metadata.dialect

    def __str__(self) -> str:
        """String representation of parser."""
        return f"{self.parser_id} (v{self._metadata.parser_version}): {self._metadata.description}"

    def __repr__(self) -> str:
        """Developer representation of parser."""
        return f"<{self.__class__.__name__} id={self.parser_id} dialect={self.dialect.value}>"


class ParserError(Exception):
    """Base exception for parser errors."""

    def __init__(self, message: str, parser: DialectParser | None = None):
        super().__init__(message)
        self.parser = parser


class UnrecognizedFormatError(ParserError):
    """No registered parser accepts the document's top-level shape."""

    def __init__(self, found_keys: list[str] | None = None):
        self.found_keys = found_keys or []
        keys = ", ".join(self.found_keys) if self.found_keys else "none"
        super().__init__(f"unrecognized format (top-level keys: {keys})")


def describe_top_level_keys(document: Any) -> list[str]:
    """List a document's top-level keys, or its type name if it is not a mapping."""
    if isinstance(document, dict):
        return [str(key) for key in document]
    return [f"<{type(document).__name__}>"]

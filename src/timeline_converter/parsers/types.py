"""Parser type definitions."""

from enum import Enum

from pydantic import BaseModel, Field

from timeline_converter.models.results import Diagnostic


class Dialect(str, Enum):
    """Recognized input document shapes."""

    SEGMENT_ARRAY = "segment_array"  # top-level list of segments (iOS export)
    SEGMENT_OBJECT = "segment_object"  # {"semanticSegments": [...]} (Android export)
    LEGACY = "legacy"  # {"timelineObjects": [...]} (Takeout / converted output)


class ParserMetadata(BaseModel):
    """Metadata about a dialect parser implementation."""

    parser_id: str = Field(description="Unique parser identifier")
    parser_version: str = Field(description="Parser version")
    dialect: Dialect = Field(description="Dialect this parser handles")
    source_platform: str = Field(description="Exporting platform")
    description: str = Field(description="Parser description")


class DiagnosticLog:
    """
    Collects non-fatal findings while normalizing one or more documents.

    Conversion errors become Diagnostic entries; segments of unrecognized
    shape are only counted, since they are expected from newer exports.
    """

    def __init__(self) -> None:
        self.entries: list[Diagnostic] = []
        self.skipped_segments = 0

    def record(self, source: str, message: str, segment_index: int | None = None) -> None:
        self.entries.append(
            Diagnostic(source=source, segment_index=segment_index, message=message)
        )

    def skip(self) -> None:
        self.skipped_segments += 1

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"<DiagnosticLog entries={len(self.entries)} skipped={self.skipped_segments}>"

"""Processing options and result models for a conversion run."""

from pydantic import BaseModel, Field

from timeline_converter.models.timeline import TimelineRecord
from timeline_converter.utils.numbers import round_half_up


class ProcessingOptions(BaseModel):
    """Switches that control cleaning and output chunking."""

    remove_activities: bool = Field(
        default=True, description="Drop movement records before deduplication"
    )
    remove_duplicates: bool = Field(
        default=True, description="Run the two-pass duplicate merge"
    )
    split_files: bool = Field(
        default=False, description="Chunk CSV/KML output above the row limit"
    )


class Diagnostic(BaseModel):
    """A non-fatal problem found while normalizing one segment."""

    source: str = Field(description="Input file or document label")
    segment_index: int | None = Field(
        default=None, description="Position of the segment within its file"
    )
    message: str = Field(description="What went wrong")

    def __str__(self) -> str:
        if self.segment_index is None:
            return f"{self.source}: {self.message}"
        return f"{self.source} [segment {self.segment_index}]: {self.message}"


class CleaningStats(BaseModel):
    """How many records each cleaning step removed."""

    removed_activities: int = Field(default=0, ge=0)
    removed_duplicates: int = Field(default=0, ge=0)

    @property
    def total_removed(self) -> int:
        return self.removed_activities + self.removed_duplicates


class RecordCounts(BaseModel):
    """Record counts before and after cleaning."""

    original: int = Field(ge=0, description="Records after normalization")
    after_activity_removal: int = Field(ge=0)
    final: int = Field(ge=0, description="Records after all cleaning")
    visit_count: int = Field(ge=0, description="PlaceVisit records in final set")
    activity_count: int = Field(
        ge=0, description="ActivitySegment records in final set"
    )

    @property
    def removed_percent(self) -> int:
        """Share of the original records removed, rounded to a whole percent."""
        if self.original == 0:
            return 0
        return round_half_up((self.original - self.final) / self.original * 100)


class ConversionResult(BaseModel):
    """Everything a successful run produces before rendering."""

    records: list[TimelineRecord] = Field(default_factory=list)
    counts: RecordCounts
    stats: CleaningStats
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    skipped_segments: int = Field(
        default=0, ge=0, description="Segments of unrecognized shape"
    )

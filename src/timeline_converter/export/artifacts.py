"""
Output artifact assembly.

Builds the CSV/KML/JSON texts for a cleaned record set and optionally writes
them to a directory. When output is chunked there is one CSV and one KML per
chunk, named ``<basename>_part<N>``; JSON is never chunked.
"""

import logging

from dataclasses import dataclass, field
from pathlib import Path

from timeline_converter.constants import DEFAULT_OUTPUT_BASENAME
from timeline_converter.export.chunking import chunk_records
from timeline_converter.export.csv_writer import render_csv
from timeline_converter.export.json_writer import render_json
from timeline_converter.export.kml import render_kml
from timeline_converter.models.timeline import TimelineRecord

logger = logging.getLogger(__name__)


@dataclass
class OutputArtifacts:
    """Rendered output texts for one run."""

    csv_parts: list[str] = field(default_factory=list)
    kml_parts: list[str] = field(default_factory=list)
    json_text: str = ""
    chunk_sizes: list[int] = field(default_factory=list)

    @property
    def is_split(self) -> bool:
        return len(self.csv_parts) > 1


def build_artifacts(
    records: list[TimelineRecord], split_files: bool = False
) -> OutputArtifacts:
    """
    Render every output format for a cleaned record set.

    Args:
        records: Cleaned records
        split_files: Chunk CSV/KML output above the per-file row limit

    Returns:
        OutputArtifacts with one CSV/KML text per chunk and a single JSON text
    """
    chunks = chunk_records(records, enabled=split_files)
    artifacts = OutputArtifacts(
        csv_parts=[render_csv(chunk) for chunk in chunks],
        kml_parts=[render_kml(chunk) for chunk in chunks],
        json_text=render_json(records),
        chunk_sizes=[len(chunk) for chunk in chunks],
    )
    if artifacts.is_split:
        logger.info(f"Split {len(records)} records into {len(chunks)} chunks")
    return artifacts


def artifact_filenames(
    basename: str, extension: str, count: int
) -> list[str]:
    """File names for ``count`` parts of one format."""
    if count == 1:
        return [f"{basename}.{extension}"]
    return [f"{basename}_part{i}.{extension}" for i in range(1, count + 1)]


def write_artifacts(
    artifacts: OutputArtifacts,
    output_dir: Path,
    basename: str = DEFAULT_OUTPUT_BASENAME,
) -> list[Path]:
    """
    Write artifacts into a directory, creating it if needed.

    Returns:
        Paths written, JSON first, then CSV parts, then KML parts
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    outputs: list[tuple[str, str]] = [(f"{basename}.json", artifacts.json_text)]
    for extension, parts in (("csv", artifacts.csv_parts), ("kml", artifacts.kml_parts)):
        names = artifact_filenames(basename, extension, len(parts))
        outputs.extend(zip(names, parts, strict=True))

    written = []
    for name, content in outputs:
        path = output_dir / name
        path.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote {path}")
        written.append(path)
    return written

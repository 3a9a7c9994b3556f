"""Serialization of cleaned records into CSV, KML and JSON."""

from timeline_converter.export.artifacts import (
    OutputArtifacts,
    build_artifacts,
    write_artifacts,
)
from timeline_converter.export.chunking import chunk_records
from timeline_converter.export.csv_writer import render_csv
from timeline_converter.export.json_writer import render_json
from timeline_converter.export.kml import render_kml

__all__ = [
    "OutputArtifacts",
    "build_artifacts",
    "chunk_records",
    "render_csv",
    "render_json",
    "render_kml",
    "write_artifacts",
]

"""
Timeline Converter

Converts, merges and deduplicates location-history exports (legacy
``timelineObjects``, the Android ``semanticSegments`` export and the iOS
segment array) and renders the result as CSV, KML and JSON.
"""

from timeline_converter.export import build_artifacts
from timeline_converter.models import ProcessingOptions, TimelineRecord
from timeline_converter.processing import ConversionError, convert_files

__all__ = [
    "ConversionError",
    "ProcessingOptions",
    "TimelineRecord",
    "build_artifacts",
    "convert_files",
]

"""Cleaning and batch conversion."""

from timeline_converter.processing.cleaner import (
    CleanResult,
    clean_records,
    deduplicate_records,
    remove_activity_records,
)
from timeline_converter.processing.pipeline import (
    ConversionError,
    convert_documents,
    convert_files,
    load_document,
    normalize_document,
)

__all__ = [
    "CleanResult",
    "ConversionError",
    "clean_records",
    "convert_documents",
    "convert_files",
    "deduplicate_records",
    "load_document",
    "normalize_document",
    "remove_activity_records",
]

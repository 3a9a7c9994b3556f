"""
Batch conversion pipeline.

Reads input files one at a time, in the order given, normalizes each into
canonical records, then cleans the combined record set. The first file that
cannot be decoded or whose format is not recognized aborts the whole batch;
no partial result is ever returned.
"""

import json
import logging

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from timeline_converter.models.results import (
    ConversionResult,
    ProcessingOptions,
    RecordCounts,
)
from timeline_converter.models.timeline import TimelineRecord
from timeline_converter.parsers.base import ParserError, UnrecognizedFormatError
from timeline_converter.parsers.register_all import register_all_parsers
from timeline_converter.parsers.registry import ParserRegistry, parser_registry
from timeline_converter.parsers.types import DiagnosticLog
from timeline_converter.processing.cleaner import clean_records

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """A fatal, batch-aborting failure tied to one input."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.reason = message


def load_document(path: Path) -> Any:
    """
    Read and decode one JSON input file.

    Raises:
        ConversionError: If the file cannot be read or is not valid JSON
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ConversionError(path.name, f"cannot read file: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConversionError(path.name, f"invalid JSON: {e}") from e


def normalize_document(
    document: Any,
    source: str,
    log: DiagnosticLog,
    registry: ParserRegistry | None = None,
) -> list[TimelineRecord]:
    """
    Detect a document's dialect and convert it into canonical records.

    Args:
        document: Decoded JSON value
        source: Label for diagnostics and errors (usually the file name)
        log: Collector for per-segment diagnostics
        registry: Registry to use (defaults to the global one)

    Returns:
        Records in document order

    Raises:
        ConversionError: If the format is not recognized or is structurally broken
    """
    if registry is None:
        register_all_parsers()
        registry = parser_registry

    try:
        parser = registry.require_parser(document)
    except UnrecognizedFormatError as e:
        raise ConversionError(source, str(e)) from e

    try:
        records = list(parser.parse_records(document, log, source=source))
    except ParserError as e:
        raise ConversionError(source, str(e)) from e

    logger.info(f"{source}: {parser.dialect.value} format, {len(records)} records")
    return records


def convert_documents(
    documents: Iterable[tuple[str, Any]],
    options: ProcessingOptions | None = None,
    registry: ParserRegistry | None = None,
) -> ConversionResult:
    """
    Normalize and clean already-decoded documents.

    Args:
        documents: (source label, decoded JSON) pairs, in processing order
        options: Cleaning switches (defaults to ProcessingOptions())
        registry: Registry to use (defaults to the global one)

    Returns:
        ConversionResult with cleaned records, counts and diagnostics

    Raises:
        ConversionError: On the first unrecognized or broken document
    """
    options = options or ProcessingOptions()
    log = DiagnosticLog()
    combined: list[TimelineRecord] = []

    for source, document in documents:
        combined.extend(normalize_document(document, source, log, registry=registry))

    cleaned = clean_records(combined, options)
    visit_count = sum(1 for record in cleaned.records if record.is_visit)

    if log.entries:
        logger.warning(f"{len(log.entries)} segment(s) could not be converted")
    if log.skipped_segments:
        logger.info(f"Skipped {log.skipped_segments} segment(s) of unrecognized shape")

    return ConversionResult(
        records=cleaned.records,
        counts=RecordCounts(
            original=cleaned.original_count,
            after_activity_removal=cleaned.after_activity_removal,
            final=cleaned.final_count,
            visit_count=visit_count,
            activity_count=cleaned.final_count - visit_count,
        ),
        stats=cleaned.stats,
        diagnostics=log.entries,
        skipped_segments=log.skipped_segments,
    )


def _iter_loaded(paths: Sequence[Path]) -> Iterable[tuple[str, Any]]:
    for path in paths:
        logger.debug(f"Reading {path}")
        yield path.name, load_document(path)


def convert_files(
    paths: Sequence[str | Path],
    options: ProcessingOptions | None = None,
    registry: ParserRegistry | None = None,
) -> ConversionResult:
    """
    Convert a batch of input files.

    Files are read sequentially; a later file is never opened once an earlier
    one has failed.

    Args:
        paths: Input files, in processing order
        options: Cleaning switches (defaults to ProcessingOptions())
        registry: Registry to use (defaults to the global one)

    Returns:
        ConversionResult for the whole batch

    Raises:
        ConversionError: On the first unreadable, invalid or unrecognized file
    """
    return convert_documents(
        _iter_loaded([Path(p) for p in paths]), options=options, registry=registry
    )

"""Format detection and dialect normalization."""

from timeline_converter.parsers.base import (
    DialectParser,
    ParserDetectionResult,
    ParserError,
    UnrecognizedFormatError,
)
from timeline_converter.parsers.registry import (
    ParserRegistry,
    detect_dialect,
    parser_registry,
)
from timeline_converter.parsers.types import Dialect, DiagnosticLog

__all__ = [
    "Dialect",
    "DialectParser",
    "DiagnosticLog",
    "ParserDetectionResult",
    "ParserError",
    "ParserRegistry",
    "UnrecognizedFormatError",
    "detect_dialect",
    "parser_registry",
]

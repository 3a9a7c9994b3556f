"""
Parser Registry System

Central registry for all dialect parsers. Provides format detection,
parser lookup, and unified access to all parser implementations.

Key Features:
- Detect the dialect of a decoded document from its top-level shape
- Explicit registration (see register_all.py)
- First registered parser that accepts a document wins
"""

import logging

from typing import Any

from timeline_converter.parsers.base import (
    DialectParser,
    UnrecognizedFormatError,
    describe_top_level_keys,
)
from timeline_converter.parsers.types import Dialect

logger = logging.getLogger(__name__)


class ParserRegistry:
    """
    Global registry for all dialect parsers.

    Detection order is registration order, so register the most specific
    shapes first.

    Usage:
        # At startup:
        register_all_parsers()

        # In application code:
        parser = parser_registry.require_parser(document)
        for record in parser.parse_records(document, log, source="Timeline.json"):
            process(record)
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._parsers: list[DialectParser] = []
        self._parsers_by_id: dict[str, DialectParser] = {}
        logger.debug("Parser registry initialized")

    def register(self, parser: DialectParser) -> None:
        """
        Register a new parser.

        Args:
            parser: DialectParser instance to register

        Raises:
            ValueError: If parser ID is already registered
        """
        parser_id = parser.parser_id

        if parser_id in self._parsers_by_id:
            existing = self._parsers_by_id[parser_id]
            raise ValueError(
                f"Parser ID '{parser_id}' already registered by {existing.__class__.__name__}"
            )

        self._parsers.append(parser)
        self._parsers_by_id[parser_id] = parser

        logger.debug(f"Registered parser: {parser}")

    def unregister(self, parser_id: str) -> bool:
        """
        Unregister a parser by ID.

        Returns:
            True if parser was removed, False if not found
        """
        parser = self._parsers_by_id.pop(parser_id, None)
        if parser is None:
            return False

        self._parsers.remove(parser)
        logger.debug(f"Unregistered parser: {parser_id}")
        return True

    def detect_parser(self, document: Any) -> DialectParser | None:
        """
        Find the parser that handles a decoded document.

        A parser whose detect() raises is logged and passed over.

        Args:
            document: Decoded JSON value

        Returns:
            DialectParser that can handle the document, or None if no match
        """
        for parser in self._parsers:
            try:
                result = parser.detect(document)
            except Exception as e:
                logger.warning(f"Parser {parser.parser_id} detection failed: {e}")
                continue

            if result.detected:
                logger.debug(
                    f"Parser {parser.parser_id} detected document: {result.message} "
                    f"({result.segment_count} segments)"
                )
                return parser

        return None

    def require_parser(self, document: Any) -> DialectParser:
        """
        Like detect_parser(), but fail when nothing matches.

        Raises:
            UnrecognizedFormatError: With the document's top-level keys
        """
        parser = self.detect_parser(document)
        if parser is None:
            raise UnrecognizedFormatError(describe_top_level_keys(document))
        return parser

    def get_parser(self, parser_id: str) -> DialectParser | None:
        """Get a specific parser by ID."""
        return self._parsers_by_id.get(parser_id)

    def get_parser_for_dialect(self, dialect: Dialect) -> DialectParser | None:
        """Get the parser registered for a dialect."""
        for parser in self._parsers:
            if parser.dialect == dialect:
                return parser
        return None

    def list_parsers(self) -> list[DialectParser]:
        """Get list of all registered parsers, in detection order."""
        return self._parsers.copy()

    def get_parser_info(self) -> dict[str, dict[str, str]]:
        """
        Get detailed information about all registered parsers.

        Returns:
            Dictionary mapping parser IDs to their metadata
        """
        info = {}
        for parser in self._parsers:
            metadata = parser.metadata
            info[parser.parser_id] = {
                "dialect": metadata.dialect.value,
                "platform": metadata.source_platform,
                "version": metadata.parser_version,
                "description": metadata.description,
            }
        return info

    @property
    def parser_count(self) -> int:
        """Get number of registered parsers."""
        return len(self._parsers)

    def __len__(self) -> int:
        """Return number of registered parsers."""
        return len(self._parsers)

    def __repr__(self) -> str:
        """Developer representation."""
        return f"<ParserRegistry parsers={self.parser_count}>"


# Global singleton registry instance
parser_registry = ParserRegistry()


def detect_dialect(document: Any, registry: ParserRegistry | None = None) -> Dialect:
    """
    Classify a decoded document into one of the known dialects.

    Args:
        document: Decoded JSON value
        registry: Registry to consult (defaults to the global one)

    Returns:
        The detected Dialect

    Raises:
        UnrecognizedFormatError: If no parser accepts the document
    """
    if registry is None:
        from timeline_converter.parsers.register_all import register_all_parsers

        register_all_parsers()
        registry = parser_registry
    return registry.require_parser(document).dialect

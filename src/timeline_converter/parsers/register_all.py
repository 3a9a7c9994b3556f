"""
Register all available dialect parsers.

Registration is explicit rather than a side effect of import. Order
matters: detection uses the first parser that accepts a document.
"""

import logging

logger = logging.getLogger(__name__)


def register_all_parsers() -> None:
    """
    Register the built-in dialect parsers with the global registry.

    Safe to call more than once; already registered parsers are left alone.
    """
    from timeline_converter.parsers.legacy import LegacyTimelineParser
    from timeline_converter.parsers.registry import parser_registry
    from timeline_converter.parsers.segment_array import SegmentArrayParser
    from timeline_converter.parsers.segment_object import SegmentObjectParser

    for parser in (SegmentArrayParser(), SegmentObjectParser(), LegacyTimelineParser()):
        if parser_registry.get_parser(parser.parser_id) is None:
            parser_registry.register(parser)

    logger.debug(
        f"Parser registration complete: {len(parser_registry)} parser(s) available"
    )

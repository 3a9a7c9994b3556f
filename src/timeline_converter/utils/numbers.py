"""Numeric helpers shared by the normalizer and the exporters."""

import math

from decimal import Decimal

from timeline_converter.constants import E7_SCALE


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties toward positive infinity.

    Exports produced by other converters use this rule, so E7 values and
    confidence percentages stay byte-identical with theirs.
    """
    return math.floor(value + 0.5)


def to_float(value: object, default: float = 0.0) -> float:
    """
    Parse a number that may arrive as int, float or numeric string.

    Returns:
        The parsed value, or default when missing, unparsable or not finite
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if not math.isfinite(result):
        return default
    return result


def format_e7(value: int) -> str:
    """
    Render an E7 integer as plain decimal degrees.

    No exponent and no trailing zeros: 400000000 -> "40", 1 -> "0.0000001".
    """
    degrees = (Decimal(value) / E7_SCALE).normalize()
    return format(degrees, "f")

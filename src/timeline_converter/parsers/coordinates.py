"""
Coordinate parsing shared by the segment dialects.

Exports write coordinates either as a geo URI (``geo:40.7128,-74.006``) or as
a degree-signed pair (``40.7128°, -74.006°``), and either directly as a string
or wrapped in ``{"latLng": ...}``. The wrapper is unpacked here so nothing
downstream ever sees it.
"""

from typing import Any, NamedTuple

from timeline_converter.constants import DEGREE_SIGN, E7_SCALE, GEO_URI_PREFIX
from timeline_converter.utils.numbers import round_half_up


class Coordinate(NamedTuple):
    """A coordinate in fixed-point E7 form."""

    latitude_e7: int
    longitude_e7: int


def to_e7(degrees: float) -> int:
    """Scale decimal degrees to an E7 integer."""
    return round_half_up(degrees * E7_SCALE)


def from_e7(value: int) -> float:
    """Scale an E7 integer back to decimal degrees."""
    return value / E7_SCALE


def _split_pair(text: str, separator: str) -> tuple[float, float]:
    parts = text.split(separator)
    if len(parts) != 2:
        raise ValueError(f"Expected a latitude/longitude pair, got {text!r}")
    return float(parts[0].strip()), float(parts[1].strip())


def parse_lat_lng_text(text: str) -> tuple[float, float]:
    """
    Parse a coordinate string into decimal degrees.

    Args:
        text: ``geo:LAT,LNG`` or ``LAT°, LNG°``

    Returns:
        (latitude, longitude)

    Raises:
        ValueError: If the string is neither form
    """
    text = text.strip()
    if text.startswith(GEO_URI_PREFIX):
        return _split_pair(text[len(GEO_URI_PREFIX) :], ",")
    return _split_pair(text.replace(DEGREE_SIGN, ""), ",")


def parse_lat_lng(value: Any) -> Coordinate:
    """
    Parse a coordinate-ish value into an E7 Coordinate.

    Args:
        value: A coordinate string, a mapping with a ``latLng`` string, or None

    Returns:
        Coordinate; a missing value yields (0, 0)

    Raises:
        ValueError: If a value is present but cannot be parsed
    """
    if isinstance(value, dict):
        value = value.get("latLng")
    if value is None or value == "":
        return Coordinate(0, 0)
    if not isinstance(value, str):
        raise ValueError(f"Unsupported coordinate value: {value!r}")

    latitude, longitude = parse_lat_lng_text(value)
    return Coordinate(to_e7(latitude), to_e7(longitude))

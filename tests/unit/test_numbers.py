"""Tests for numeric helpers."""

import pytest

from timeline_converter.utils.numbers import round_half_up, to_float


@pytest.mark.parametrize(
    "value, expected", [(2.5, 3), (-2.5, -2), (0.49, 0), (-0.51, -1), (7, 7)]
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(3, 3.0), ("12.5", 12.5), (" 4 ", 4.0), (1.25, 1.25)],
)
def test_to_float_parses_numbers(value, expected):
    assert to_float(value) == expected


@pytest.mark.parametrize(
    "value",
    [None, True, "", "abc", [], "nan", "Infinity", "-inf", "1e400", float("inf")],
)
def test_to_float_rejects_unusable_values(value):
    assert to_float(value) == 0.0
    assert to_float(value, default=-1.0) == -1.0

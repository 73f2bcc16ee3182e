import math

import pytest

from domain.terrain.errors import FormatError, InvalidCoordinateFormatError
from infrastructure.terrain.dms import parse_coordinate, parse_dms


# ---------------------------------------------------------------------------
# parse_dms
# ---------------------------------------------------------------------------
def test_two_digit_degrees():
    dms = parse_dms("051245")
    assert (dms.degrees, dms.minutes, dms.seconds) == (5, 12, 45.0)
    assert math.isclose(dms.to_decimal(), 5 + (12 + 45 / 60) / 60)


def test_three_digit_degrees():
    dms = parse_dms("1234530")
    assert (dms.degrees, dms.minutes, dms.seconds) == (123, 45, 30.0)


def test_fractional_seconds():
    dms = parse_dms("0512345.5")
    assert (dms.degrees, dms.minutes) == (51, 23)
    assert math.isclose(dms.seconds, 45.5)
    assert math.isclose(dms.to_decimal(), 51 + (23 + 45.5 / 60) / 60)


def test_single_digit_degrees_is_minimum_width():
    dms = parse_dms("73000")
    assert (dms.degrees, dms.minutes, dms.seconds) == (7, 30, 0.0)


@pytest.mark.parametrize("text", ["", "1234", "12.5", "345.5"])
def test_too_short_rejected(text):
    with pytest.raises(InvalidCoordinateFormatError):
        parse_dms(text)


@pytest.mark.parametrize("text", ["05AB45", "0512 5", "ab1245", "05-245", "0512345.x"])
def test_non_numeric_subfield_rejected(text):
    with pytest.raises(InvalidCoordinateFormatError) as exc:
        parse_dms(text)
    assert exc.value.text == text


def test_invalid_coordinate_is_a_format_error():
    with pytest.raises(FormatError):
        parse_dms("xx")


# ---------------------------------------------------------------------------
# parse_coordinate (hemisphere handling)
# ---------------------------------------------------------------------------
def test_north_is_positive():
    assert math.isclose(parse_coordinate("051245N"), 5.2125)


def test_south_and_west_negate():
    assert math.isclose(parse_coordinate("051245S"), -5.2125)
    assert math.isclose(parse_coordinate("0071500W"), -7.25)


def test_east_and_missing_hemisphere_are_positive():
    assert math.isclose(parse_coordinate("0071500E"), 7.25)
    assert math.isclose(parse_coordinate("0071500"), 7.25)


def test_lowercase_hemisphere_accepted():
    assert math.isclose(parse_coordinate("0071500w"), -7.25)


def test_dsi_style_fractional_with_hemisphere():
    assert math.isclose(parse_coordinate("463000.0N"), 46.5)
    assert math.isclose(parse_coordinate("0071500.0E"), 7.25)


def test_unknown_hemisphere_rejected():
    with pytest.raises(InvalidCoordinateFormatError):
        parse_coordinate("051245X")


def test_blank_coordinate_rejected():
    with pytest.raises(InvalidCoordinateFormatError):
        parse_coordinate("        ")

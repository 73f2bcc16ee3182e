"""DMS coordinate decoding for DTED header strings.

DTED stores coordinates as ``[D]DDMMSS[.S]H`` text: 1-3 degree digits,
2 minute digits, 2 second digits with an optional tenths digit, and a
trailing hemisphere letter.
"""

from __future__ import annotations

from domain.terrain.errors import InvalidCoordinateFormatError
from domain.terrain.value_objects import DMSCoordinate

_NEGATIVE_HEMISPHERES = frozenset("SW")
_POSITIVE_HEMISPHERES = frozenset("NE")

# DMMSS without fraction, DMMSS.S with one
_MIN_WIDTH = 5
_MIN_WIDTH_FRACTIONAL = 7


def _is_ascii_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def parse_dms(text: str) -> DMSCoordinate:
    """Parse ``[D]DDMMSS[.S]`` (no hemisphere) into a DMSCoordinate.

    Seconds occupy the last 4 characters when the second-to-last character
    is ``.``, otherwise the last 2. Minutes are the 2 characters before the
    seconds; degrees are everything before the minutes.

    Raises:
        InvalidCoordinateFormatError: If the text is too short or any
            sub-field is not a plain decimal number
    """
    fractional = len(text) >= 2 and text[-2] == "."
    seconds_width = 4 if fractional else 2
    min_width = _MIN_WIDTH_FRACTIONAL if fractional else _MIN_WIDTH
    if len(text) < min_width:
        raise InvalidCoordinateFormatError(text, f"shorter than {min_width} characters")

    seconds_text = text[-seconds_width:]
    minutes_text = text[-seconds_width - 2 : -seconds_width]
    degrees_text = text[: -seconds_width - 2]

    seconds_digits = seconds_text.replace(".", "", 1) if fractional else seconds_text
    for name, part in (
        ("degrees", degrees_text),
        ("minutes", minutes_text),
        ("seconds", seconds_digits),
    ):
        if not _is_ascii_digits(part):
            raise InvalidCoordinateFormatError(text, f"{name} {part!r} is not numeric")

    return DMSCoordinate(
        degrees=int(degrees_text),
        minutes=int(minutes_text),
        seconds=float(seconds_text),
    )


def parse_coordinate(text: str) -> float:
    """Parse a DTED coordinate string into signed decimal degrees.

    A trailing hemisphere letter is stripped; ``S`` and ``W`` negate the
    value, ``N``, ``E`` or no letter leave it positive.

    Example:
        >>> parse_coordinate("051245N")
        5.2125
    """
    text = text.strip()
    if not text:
        raise InvalidCoordinateFormatError(text, "empty")

    sign = 1.0
    hemisphere = text[-1].upper()
    if hemisphere.isalpha():
        if hemisphere in _NEGATIVE_HEMISPHERES:
            sign = -1.0
        elif hemisphere not in _POSITIVE_HEMISPHERES:
            raise InvalidCoordinateFormatError(text, f"unknown hemisphere {text[-1]!r}")
        text = text[:-1]

    return sign * parse_dms(text).to_decimal()

"""Parsers for the three fixed-size DTED header records.

Each parser validates the record length and its literal sentinel, then reads
ASCII sub-fields at fixed byte offsets (0-based, relative to the record
start) into a domain Value Object.

Record layout summary:

    UHL   80 bytes  sentinel "UHL1"
    DSI  648 bytes  sentinel "DSI"
    ACC 2700 bytes  sentinel "ACC"
"""

from __future__ import annotations

import logging

from domain.terrain.errors import (
    InvalidCoordinateFormatError,
    InvalidNumericFieldError,
    MissingSentinelError,
    TruncatedRecordError,
)
from domain.terrain.value_objects import (
    AccuracyDescription,
    DataSetIdentification,
    LatitudeLongitude,
    Shape,
    UserHeaderLabel,
)

from .byte_region import slice_bytes
from .dms import parse_coordinate, parse_dms

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Record sizes and sentinels
# ---------------------------------------------------------------------------
UHL_KIND = "UHL"
DSI_KIND = "DSI"
ACC_KIND = "ACC"

UHL_SIZE = 80
DSI_SIZE = 648
ACC_SIZE = 2700
HEADER_SIZE = UHL_SIZE + DSI_SIZE + ACC_SIZE  # 3428: first data block offset

UHL_SENTINEL = b"UHL1"
DSI_SENTINEL = b"DSI"
ACC_SENTINEL = b"ACC"

# Interval fields are stored in tenths of arc-seconds
INTERVAL_SCALE = 10.0

# DSI coordinate/interval/shape block base offset
DSI_GEO_BASE = 185


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------
def _check_record(data: bytes, kind: str, size: int, sentinel: bytes) -> None:
    if len(data) < size:
        raise TruncatedRecordError(kind, size, len(data))
    found = slice_bytes(data, 0, len(sentinel))
    if found != sentinel:
        raise MissingSentinelError(kind, found)


def _text(data: bytes, start: int, length: int) -> str:
    """Decode an ASCII text field; non-ASCII bytes are replaced, not fatal."""
    return slice_bytes(data, start, start + length).decode("ascii", errors="replace")


def _int(data: bytes, start: int, length: int, kind: str, field: str) -> int:
    raw = _text(data, start, length)
    try:
        return int(raw.strip())
    except ValueError as e:
        raise InvalidNumericFieldError(kind, field, raw) from e


def _optional_int(data: bytes, start: int, length: int) -> int | None:
    """Return the integer value, or None when the field is not numeric."""
    raw = _text(data, start, length).strip()
    try:
        return int(raw)
    except ValueError:
        return None


def _interval(data: bytes, start: int, kind: str, field: str) -> float:
    return _int(data, start, 4, kind, field) / INTERVAL_SCALE


def _coordinate(
    data: bytes,
    lat_start: int,
    lat_length: int,
    lon_start: int,
    lon_length: int,
    kind: str,
    field: str,
) -> LatitudeLongitude:
    lat_raw = _text(data, lat_start, lat_length)
    lon_raw = _text(data, lon_start, lon_length)
    try:
        latitude = parse_coordinate(lat_raw)
        longitude = parse_coordinate(lon_raw)
    except InvalidCoordinateFormatError as e:
        raise InvalidNumericFieldError(kind, field, f"{lat_raw}/{lon_raw}") from e
    return LatitudeLongitude(latitude=latitude, longitude=longitude)


def _shape(data: bytes, columns_start: int, rows_start: int, kind: str) -> Shape:
    columns = _int(data, columns_start, 4, kind, "columns")
    rows = _int(data, rows_start, 4, kind, "rows")
    if columns < 1:
        raise InvalidNumericFieldError(kind, "columns", str(columns))
    if rows < 1:
        raise InvalidNumericFieldError(kind, "rows", str(rows))
    return Shape(columns=columns, rows=rows)


def _coverage(data: bytes, start: int) -> float:
    """Partial cell indicator as a fraction; "00" or blank means complete."""
    raw = _text(data, start, 2)
    if not raw.strip():
        return 1.0
    percent = _int(data, start, 2, DSI_KIND, "coverage")
    if not (0 <= percent <= 99):
        raise InvalidNumericFieldError(DSI_KIND, "coverage", raw)
    return percent / 100.0 if percent else 1.0


# ---------------------------------------------------------------------------
# User Header Label
# ---------------------------------------------------------------------------
def parse_user_header_label(data: bytes) -> UserHeaderLabel:
    """Parse the 80-byte User Header Label.

    Raises:
        TruncatedRecordError: If fewer than 80 bytes are given
        MissingSentinelError: If the record does not start with ``UHL1``
        InvalidNumericFieldError: If a numeric sub-field cannot be parsed
    """
    _check_record(data, UHL_KIND, UHL_SIZE, UHL_SENTINEL)

    # Origin: longitude @4, latitude @12, both DDDMMSSH
    origin = _coordinate(data, 12, 8, 4, 8, UHL_KIND, "origin")

    return UserHeaderLabel(
        origin=origin,
        longitude_interval=_interval(data, 20, UHL_KIND, "longitude_interval"),
        latitude_interval=_interval(data, 24, UHL_KIND, "latitude_interval"),
        vertical_accuracy=_optional_int(data, 28, 4),
        security_code=_text(data, 32, 3).rstrip(),
        reference=_text(data, 35, 12).rstrip(),
        shape=_shape(data, 47, 51, UHL_KIND),
        multiple_accuracy=_text(data, 55, 1) != "0",
    )


# ---------------------------------------------------------------------------
# Data Set Identification
# ---------------------------------------------------------------------------
def parse_data_set_identification(data: bytes) -> DataSetIdentification:
    """Parse the 648-byte Data Set Identification record.

    Intervals and line counts are stored latitude-first; they are paired
    here so that columns come from the longitude-line count (the later
    offset) and rows from the latitude-line count (the earlier one).

    Raises:
        TruncatedRecordError: If fewer than 648 bytes are given
        MissingSentinelError: If the record does not start with ``DSI``
        InvalidNumericFieldError: If a numeric sub-field cannot be parsed
    """
    _check_record(data, DSI_KIND, DSI_SIZE, DSI_SENTINEL)
    base = DSI_GEO_BASE

    orientation_raw = _text(data, base + 79, 9)
    try:
        orientation = parse_dms(orientation_raw.strip()).to_decimal()
    except InvalidCoordinateFormatError as e:
        raise InvalidNumericFieldError(DSI_KIND, "orientation", orientation_raw) from e

    coverage = _coverage(data, base + 104)

    return DataSetIdentification(
        security_code=_text(data, 3, 1),
        release_markings=_text(data, 4, 2).rstrip(),
        handling_description=_text(data, 6, 27).rstrip(),
        product_level=_text(data, 59, 5).rstrip(),
        reference=_text(data, 64, 15).rstrip(),
        edition=_text(data, 107, 2),
        merge_version=_text(data, 109, 1),
        maintenance_date=_text(data, 110, 4),
        merge_date=_text(data, 114, 4),
        maintenance_code=_text(data, 118, 4),
        producer_code=_text(data, 122, 8).rstrip(),
        product_specification=_text(data, 169, 11).rstrip(),
        specification_date=_text(data, 180, 4),
        vertical_datum=_text(data, 184, 3).rstrip(),
        horizontal_datum=_text(data, 187, 5).rstrip(),
        collection_system=_text(data, 192, 10).rstrip(),
        compilation_date=_text(data, 202, 4),
        origin=_coordinate(data, base, 9, base + 9, 10, DSI_KIND, "origin"),
        south_west=_coordinate(
            data, base + 19, 7, base + 26, 8, DSI_KIND, "south_west"
        ),
        north_west=_coordinate(
            data, base + 34, 7, base + 41, 8, DSI_KIND, "north_west"
        ),
        north_east=_coordinate(
            data, base + 49, 7, base + 56, 8, DSI_KIND, "north_east"
        ),
        south_east=_coordinate(
            data, base + 64, 7, base + 71, 8, DSI_KIND, "south_east"
        ),
        orientation=orientation,
        latitude_interval=_interval(data, base + 88, DSI_KIND, "latitude_interval"),
        longitude_interval=_interval(
            data, base + 92, DSI_KIND, "longitude_interval"
        ),
        shape=_shape(data, base + 100, base + 96, DSI_KIND),
        coverage=coverage,
    )


# ---------------------------------------------------------------------------
# Accuracy Description
# ---------------------------------------------------------------------------
def parse_accuracy_description(data: bytes) -> AccuracyDescription:
    """Parse the 2700-byte Accuracy Description record.

    Only the four headline accuracy figures are decoded. A figure that is
    not a valid integer (commonly ``"NA  "`` or blanks) is None.

    Raises:
        TruncatedRecordError: If fewer than 2700 bytes are given
        MissingSentinelError: If the record does not start with ``ACC``
    """
    _check_record(data, ACC_KIND, ACC_SIZE, ACC_SENTINEL)

    acc = AccuracyDescription(
        absolute_horizontal=_optional_int(data, 3, 4),
        absolute_vertical=_optional_int(data, 7, 4),
        relative_horizontal=_optional_int(data, 11, 4),
        relative_vertical=_optional_int(data, 15, 4),
    )
    logger.debug("ACC: %s", acc)
    return acc

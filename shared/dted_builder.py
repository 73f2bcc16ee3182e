"""Synthetic DTED byte builder for tests and fixture generation.

Produces minimal but structurally complete DTED files: UHL, DSI and ACC
headers at the offsets the reader expects, followed by one data block per
column with sign-magnitude elevations and valid checksums.

This is test tooling only - not real terrain data and not a general DTED
writer.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike

UHL_SIZE = 80
DSI_SIZE = 648
ACC_SIZE = 2700
HEADER_SIZE = UHL_SIZE + DSI_SIZE + ACC_SIZE

DSI_GEO_BASE = 185
MAX_INTERVAL_TENTHS = 9999  # 4-digit field


# =============================================================================
# Field encoders
# =============================================================================
def encode_dms(
    value: float,
    degree_digits: int,
    fractional: bool,
    hemispheres: tuple[str, str] = ("N", "S"),
) -> str:
    """Encode decimal degrees as DTED ``[D]DDMMSS[.S]H`` text."""
    hemisphere = hemispheres[0] if value >= 0 else hemispheres[1]
    if fractional:
        tenths = round(abs(value) * 36000)
        degrees, rem = divmod(tenths, 36000)
        minutes, sec_tenths = divmod(rem, 600)
        seconds = f"{sec_tenths // 10:02d}.{sec_tenths % 10}"
    else:
        total = round(abs(value) * 3600)
        degrees, rem = divmod(total, 3600)
        minutes, secs = divmod(rem, 60)
        seconds = f"{secs:02d}"
    return f"{degrees:0{degree_digits}d}{minutes:02d}{seconds}{hemisphere}"


def encode_elevation(value: int) -> bytes:
    """Encode one elevation as 2-byte big-endian sign-magnitude."""
    if not -32767 <= value <= 32767:
        raise ValueError(f"Elevation out of sign-magnitude range: {value}")
    raw = value if value >= 0 else 0x8000 | -value
    return raw.to_bytes(2, "big")


def _put(buf: bytearray, offset: int, text: str) -> None:
    encoded = text.encode("ascii")
    buf[offset : offset + len(encoded)] = encoded


def _num(value: int, width: int) -> str:
    return f"{value:0{width}d}"


def _accuracy(value: int | None) -> str:
    return "NA  " if value is None else _num(value, 4)


def interval_tenths(span_deg: float, count: int) -> int:
    """Sample spacing in tenths of arc-seconds, clamped to the field width."""
    if count < 2:
        return MAX_INTERVAL_TENTHS
    return min(round(span_deg * 36000 / (count - 1)), MAX_INTERVAL_TENTHS)


# =============================================================================
# Records
# =============================================================================
def build_uhl(
    origin_lat: float,
    origin_lon: float,
    columns: int,
    rows: int,
    lon_interval: int = 30,
    lat_interval: int = 30,
    vertical_accuracy: int | None = None,
    security_code: str = "U",
    reference: str = "SYNTHETIC",
    multiple_accuracy: str = "0",
) -> bytes:
    buf = bytearray(b" " * UHL_SIZE)
    _put(buf, 0, "UHL1")
    _put(buf, 4, encode_dms(origin_lon, 3, False, ("E", "W")))
    _put(buf, 12, encode_dms(origin_lat, 3, False, ("N", "S")))
    _put(buf, 20, _num(lon_interval, 4))
    _put(buf, 24, _num(lat_interval, 4))
    _put(buf, 28, _accuracy(vertical_accuracy))
    _put(buf, 32, security_code.ljust(3)[:3])
    _put(buf, 35, reference.ljust(12)[:12])
    _put(buf, 47, _num(columns, 4))
    _put(buf, 51, _num(rows, 4))
    _put(buf, 55, multiple_accuracy[:1])
    return bytes(buf)


def build_dsi(
    origin_lat: float,
    origin_lon: float,
    columns: int,
    rows: int,
    span_deg: float = 1.0,
    lon_interval: int = 30,
    lat_interval: int = 30,
    coverage: int = 0,
    product_level: str = "DTED1",
    edition: str = "01",
    maintenance_date: str = "0000",
    merge_date: str = "0000",
    specification_date: str = "0005",
    compilation_date: str = "9901",
) -> bytes:
    buf = bytearray(b" " * DSI_SIZE)
    _put(buf, 0, "DSI")
    _put(buf, 3, "U")
    _put(buf, 4, "  ")
    _put(buf, 6, "SYNTHETIC TEST DATA".ljust(27))
    _put(buf, 59, product_level.ljust(5)[:5])
    _put(buf, 64, "SYNTH-0000001".ljust(15))
    _put(buf, 107, edition[:2])
    _put(buf, 109, "A")
    _put(buf, 110, maintenance_date)
    _put(buf, 114, merge_date)
    _put(buf, 118, "0000")
    _put(buf, 122, "TESTPROD")
    _put(buf, 169, "MIL-PRF-890")
    _put(buf, 180, specification_date)
    _put(buf, 184, "MSL")
    _put(buf, 187, "WGS84")
    _put(buf, 192, "SYNTHETIC ")
    _put(buf, 202, compilation_date)

    # Geographic block is written last; it shares bytes with the text
    # fields above
    base = DSI_GEO_BASE
    north, east = origin_lat + span_deg, origin_lon + span_deg
    lon_h = ("E", "W")
    _put(buf, base, encode_dms(origin_lat, 2, True))
    _put(buf, base + 9, encode_dms(origin_lon, 3, True, lon_h))
    corners = (
        (origin_lat, origin_lon),  # south-west
        (north, origin_lon),  # north-west
        (north, east),  # north-east
        (origin_lat, east),  # south-east
    )
    for i, (lat, lon) in enumerate(corners):
        offset = base + 19 + i * 15
        _put(buf, offset, encode_dms(lat, 2, False))
        _put(buf, offset + 7, encode_dms(lon, 3, False, lon_h))
    _put(buf, base + 79, "0000000.0")
    _put(buf, base + 88, _num(lat_interval, 4))
    _put(buf, base + 92, _num(lon_interval, 4))
    _put(buf, base + 96, _num(rows, 4))
    _put(buf, base + 100, _num(columns, 4))
    _put(buf, base + 104, _num(coverage, 2))
    return bytes(buf)


def build_acc(
    absolute_horizontal: int | None = None,
    absolute_vertical: int | None = None,
    relative_horizontal: int | None = None,
    relative_vertical: int | None = None,
) -> bytes:
    buf = bytearray(b" " * ACC_SIZE)
    _put(buf, 0, "ACC")
    _put(buf, 3, _accuracy(absolute_horizontal))
    _put(buf, 7, _accuracy(absolute_vertical))
    _put(buf, 11, _accuracy(relative_horizontal))
    _put(buf, 15, _accuracy(relative_vertical))
    return bytes(buf)


def build_data_block(index: int, elevations: Sequence[int]) -> bytes:
    """Build one data block with a valid checksum."""
    body = bytearray([0xAA])
    body += index.to_bytes(3, "big")
    body += index.to_bytes(2, "big")
    body += (0).to_bytes(2, "big")
    for value in elevations:
        body += encode_elevation(int(value))
    checksum = sum(body)
    return bytes(body) + checksum.to_bytes(4, "big", signed=True)


def block_offset(index: int, rows: int) -> int:
    """Byte offset of data block ``index`` within a complete file."""
    return HEADER_SIZE + index * (12 + 2 * rows)


# =============================================================================
# Complete file
# =============================================================================
def build_dted(
    elevations: ArrayLike,
    origin_lat: float = 0.0,
    origin_lon: float = 0.0,
    span_deg: float = 1.0,
    accuracy: Sequence[int | None] = (None, None, None, None),
    coverage: int = 0,
    vertical_accuracy: int | None = None,
) -> bytes:
    """Build a complete DTED file.

    Args:
        elevations: 2D array indexed [column][row] (west->east, south->north)
        origin_lat: South-west corner latitude
        origin_lon: South-west corner longitude
        span_deg: Extent of the tile on both axes
        accuracy: ACC absolute/relative horizontal/vertical figures
        coverage: DSI partial cell indicator (percent, 0 = complete)
        vertical_accuracy: UHL absolute vertical accuracy

    Returns:
        Complete file contents
    """
    grid = np.asarray(elevations, dtype=np.int64)
    if grid.ndim != 2:
        raise ValueError(f"Elevations must be 2D [column][row], got {grid.ndim}D")
    columns, rows = grid.shape
    lon_interval = interval_tenths(span_deg, columns)
    lat_interval = interval_tenths(span_deg, rows)

    parts = [
        build_uhl(
            origin_lat,
            origin_lon,
            columns,
            rows,
            lon_interval=lon_interval,
            lat_interval=lat_interval,
            vertical_accuracy=vertical_accuracy,
        ),
        build_dsi(
            origin_lat,
            origin_lon,
            columns,
            rows,
            span_deg=span_deg,
            lon_interval=lon_interval,
            lat_interval=lat_interval,
            coverage=coverage,
        ),
        build_acc(*accuracy),
    ]
    parts.extend(build_data_block(i, column) for i, column in enumerate(grid))
    return b"".join(parts)

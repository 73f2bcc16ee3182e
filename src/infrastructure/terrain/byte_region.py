"""Bounds-checked byte slicing.

All DTED parsers read through ``slice_bytes`` so truncated input fails with
ByteRangeError instead of silently returning a short slice.
"""

from __future__ import annotations

from domain.terrain.errors import ByteRangeError


def slice_bytes(buffer: bytes, start: int, end: int) -> bytes:
    """Return ``buffer[start:end]`` or raise ByteRangeError.

    Args:
        buffer: Raw bytes (bytes, bytearray or memoryview)
        start: First offset (inclusive)
        end: Last offset (exclusive)

    Raises:
        ByteRangeError: If start is negative, start > end, or end > len(buffer)
    """
    if start < 0 or start > end or end > len(buffer):
        raise ByteRangeError(start, end, len(buffer))
    return bytes(buffer[start:end])

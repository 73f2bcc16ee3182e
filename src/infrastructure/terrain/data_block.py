"""DTED elevation data block decoding.

Each data block holds one grid column (one longitude line), south to north:

    offset 0       sentinel 0xAA
    offset 1-3     data block count (big-endian)
    offset 4-5     longitude count
    offset 6-7     latitude count
    offset 8..n-4  elevations, 2 bytes each, big-endian sign-magnitude
    offset n-4..n  checksum (big-endian signed sum of all preceding bytes)

Block length is ``12 + 2 * rows``.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from domain.terrain.errors import (
    BadBlockSentinelError,
    ByteRangeError,
    ChecksumMismatchError,
    TruncatedBlockError,
)
from domain.terrain.value_objects import VOID_ELEVATION, DataBlock

from .byte_region import slice_bytes

logger = logging.getLogger(__name__)

BLOCK_SENTINEL = 0xAA
BLOCK_HEADER_SIZE = 8
BLOCK_CHECKSUM_SIZE = 4
BLOCK_OVERHEAD = BLOCK_HEADER_SIZE + BLOCK_CHECKSUM_SIZE  # 12

# Explicit big-endian int16 so decoding does not depend on host byte order
_ELEVATION_DTYPE = np.dtype(">i2")


def block_length(rows: int) -> int:
    """Return the byte length of one data block for ``rows`` latitude lines."""
    return BLOCK_OVERHEAD + 2 * rows


def sign_magnitude_to_twos_complement(
    values: NDArray[np.integer],
) -> NDArray[np.int16]:
    """Convert samples decoded as two's complement back to their DTED meaning.

    DTED stores elevations as a sign bit plus 15 magnitude bits. Read as
    two's complement, a negative-coded value ``v`` maps to ``-32768 - v``;
    non-negative values are unchanged. E.g. raw ``-1`` (0xFFFF) becomes
    ``-32767``, the void value.
    """
    wide = np.asarray(values, dtype=np.int32)
    converted = np.where(wide < 0, -32768 - wide, wide)
    return converted.astype(np.int16)


def _checksum(block: bytes) -> int:
    return int(np.frombuffer(block, dtype=np.uint8).sum(dtype=np.int64))


def parse_data_block(
    block: bytes,
    index: int,
    rows: int | None = None,
    verify_checksum: bool = False,
) -> DataBlock:
    """Decode one elevation data block.

    Args:
        block: Raw block bytes
        index: Zero-based block (column) index, used in error reporting
        rows: Expected latitude-line count; enforces the exact block length
        verify_checksum: Compare the trailing checksum against the byte sum

    Returns:
        DataBlock with read-only int16 elevations

    Raises:
        BadBlockSentinelError: If the first byte is not 0xAA
        TruncatedBlockError: If the block is shorter than expected
        ChecksumMismatchError: If verification is enabled and fails
    """
    expected = block_length(rows) if rows is not None else BLOCK_OVERHEAD
    if len(block) == 0:
        raise TruncatedBlockError(index, expected, 0)
    if block[0] != BLOCK_SENTINEL:
        raise BadBlockSentinelError(index, block[0])
    if len(block) < expected:
        raise TruncatedBlockError(index, expected, len(block))

    end = expected if rows is not None else len(block)
    # Payload must hold whole 2-byte samples
    if (end - BLOCK_OVERHEAD) % 2:
        raise TruncatedBlockError(index, end + 1, len(block))

    try:
        header = slice_bytes(block, 0, BLOCK_HEADER_SIZE)
        payload = slice_bytes(block, BLOCK_HEADER_SIZE, end - BLOCK_CHECKSUM_SIZE)
        stored = int.from_bytes(
            slice_bytes(block, end - BLOCK_CHECKSUM_SIZE, end), "big", signed=True
        )
    except ByteRangeError as e:
        raise TruncatedBlockError(index, expected, len(block)) from e

    if verify_checksum:
        computed = _checksum(slice_bytes(block, 0, end - BLOCK_CHECKSUM_SIZE))
        if computed != stored:
            raise ChecksumMismatchError(index, stored, computed)

    raw = np.frombuffer(payload, dtype=_ELEVATION_DTYPE)
    elevations = sign_magnitude_to_twos_complement(raw)

    if np.any(elevations == VOID_ELEVATION):
        logger.debug("Data block %d: contains void samples", index)

    return DataBlock(
        index=index,
        block_count=int.from_bytes(header[1:4], "big"),
        longitude_count=int.from_bytes(header[4:6], "big"),
        latitude_count=int.from_bytes(header[6:8], "big"),
        checksum=stored,
        elevations=elevations,
    )

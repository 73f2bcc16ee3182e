"""Terrain Bounded Context - Error Hierarchy.

Custom exceptions and warnings for DTED loading and elevation queries.

Header record failures are FormatError subclasses ("corrupt file"), elevation
block failures are DataBlockError subclasses ("invalid data"). Both abort a
load; there is no partially built GeoData.
"""

from __future__ import annotations


class TerrainError(Exception):
    """Base error for terrain operations."""


class DtedIOError(TerrainError, OSError):
    """File is missing, unreadable, or empty."""


class InsufficientMemoryError(TerrainError):
    """Operation requires more memory than allowed or available."""


class ByteRangeError(TerrainError, IndexError):
    """Requested byte range lies outside the buffer.

    Attributes:
        start: First requested offset
        end: Exclusive end offset
        length: Length of the buffer
    """

    def __init__(self, start: int, end: int, length: int) -> None:
        self.start = start
        self.end = end
        self.length = length
        super().__init__(
            f"Byte range [{start}, {end}) outside buffer of {length} bytes"
        )


# ---------------------------------------------------------------------------
# Header Record Errors
# ---------------------------------------------------------------------------
class FormatError(TerrainError, ValueError):
    """Header record is malformed."""


class MissingSentinelError(FormatError):
    """Record does not start with its literal sentinel."""

    def __init__(self, record_kind: str, found: bytes = b"") -> None:
        self.record_kind = record_kind
        self.found = found
        super().__init__(f"{record_kind}: missing sentinel (found {found!r})")


class TruncatedRecordError(FormatError):
    """Input is shorter than the record's fixed size."""

    def __init__(self, record_kind: str, expected: int, actual: int) -> None:
        self.record_kind = record_kind
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{record_kind}: truncated record ({actual} of {expected} bytes)"
        )


class InvalidNumericFieldError(FormatError):
    """An ASCII numeric sub-field failed to parse."""

    def __init__(self, record_kind: str, field_name: str, raw: str = "") -> None:
        self.record_kind = record_kind
        self.field_name = field_name
        self.raw = raw
        super().__init__(f"{record_kind}: invalid numeric field {field_name}={raw!r}")


class InvalidCoordinateFormatError(FormatError):
    """A degree/minute/second coordinate string is malformed."""

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        self.reason = reason
        message = f"Invalid DMS coordinate {text!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Data Block Errors
# ---------------------------------------------------------------------------
class DataBlockError(TerrainError, ValueError):
    """An elevation data block is invalid.

    Attributes:
        block_index: Zero-based index of the offending block (grid column)
    """

    def __init__(self, block_index: int, message: str) -> None:
        self.block_index = block_index
        super().__init__(f"Data block {block_index}: {message}")


class BadBlockSentinelError(DataBlockError):
    """Block does not start with 0xAA."""

    def __init__(self, block_index: int, found: int) -> None:
        self.found = found
        super().__init__(block_index, f"bad sentinel 0x{found:02X}")


class TruncatedBlockError(DataBlockError):
    """Block is shorter than the fixed block length."""

    def __init__(self, block_index: int, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(block_index, f"truncated ({actual} of {expected} bytes)")


class ChecksumMismatchError(DataBlockError):
    """Stored block checksum does not match the byte sum."""

    def __init__(self, block_index: int, stored: int, computed: int) -> None:
        self.stored = stored
        self.computed = computed
        super().__init__(
            block_index, f"checksum mismatch (stored {stored}, computed {computed})"
        )


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------
class DtedWarning(UserWarning):
    """Base warning for non-fatal DTED conditions."""


class VoidDataWarning(DtedWarning):
    """Grid contains the void data value (-32767)."""

    def __init__(self, source: str, count: int = 0) -> None:
        self.source = source
        self.count = count
        super().__init__(f"{source}: {count} void data samples detected")


class CoordinateRangeWarning(DtedWarning):
    """Latitude or longitude lies outside its canonical range."""

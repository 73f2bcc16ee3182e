"""DTED adapter for TerrainRepository.

Implements loading of DTED tiles (.dt0/.dt1/.dt2) by decoding the binary
records directly and returning a domain GeoData aggregate.

Lifecycle:
1) Stat the file: missing, non-regular or empty files fail as DtedIOError
2) Optional memory budget pre-flight check
3) Read the whole file in one blocking call
4) Slice and parse UHL, DSI and ACC headers (any failure aborts the load)
5) Parse exactly `columns` data blocks of `12 + 2*rows` bytes each
6) Stack blocks in file order into a (columns x rows) int16 grid
7) Warn once if the void value is present
8) Return GeoData (immutable; nothing is returned on failure)
"""

from __future__ import annotations

import logging
import sys
import warnings
from pathlib import Path

import numpy as np

from domain.terrain.errors import (
    ByteRangeError,
    DtedIOError,
    InsufficientMemoryError,
    TruncatedRecordError,
    VoidDataWarning,
)
from domain.terrain.value_objects import DataBlock, GeoData

from .byte_region import slice_bytes
from .data_block import block_length, parse_data_block
from .dted_records import (
    ACC_KIND,
    ACC_SIZE,
    DSI_KIND,
    DSI_SIZE,
    HEADER_SIZE,
    UHL_KIND,
    UHL_SIZE,
    parse_accuracy_description,
    parse_data_set_identification,
    parse_user_header_label,
)

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)


def _record_region(data: bytes, start: int, size: int, kind: str) -> bytes:
    try:
        return slice_bytes(data, start, start + size)
    except ByteRangeError as e:
        raise TruncatedRecordError(kind, size, max(0, len(data) - start)) from e


def _report_voids(geo: GeoData, stacklevel: int) -> None:
    """Log and warn once for a loaded tile that contains void samples.

    ``stacklevel`` counts from the caller of this function, as in
    ``warnings.warn``. No per-location registry is passed, so repeated loads
    from the same line each surface their warning under the default filters.
    """
    void_count = geo.void_count
    if not void_count:
        return

    # Log only filename, not full path
    name = Path(geo.source_path).name
    logger.warning("DEM %s: %d void data samples detected", name, void_count)

    frame = sys._getframe(stacklevel)
    warnings.warn_explicit(
        VoidDataWarning(name, void_count),
        VoidDataWarning,
        frame.f_code.co_filename,
        frame.f_lineno,
        module=frame.f_globals.get("__name__"),
        module_globals=frame.f_globals,
    )


class DtedTerrainAdapter:
    """Infrastructure adapter for loading DTED tiles.

    Parameters
    ----------
    max_bytes: int | None
        Optional memory budget for the resulting int16 grid
        (columns*rows*2). Exceeding it raises InsufficientMemoryError. Files
        larger than twice the budget are rejected before reading.
    verify_checksums: bool
        Verify each data block's trailing checksum. Off by default since
        some producers leave checksums unset.
    """

    def __init__(
        self, max_bytes: int | None = None, verify_checksums: bool = False
    ) -> None:
        self.max_bytes = max_bytes
        self.verify_checksums = verify_checksums

    def load_dem(self, file_path: Path | str) -> GeoData:
        """Load a DTED tile and return a fully populated GeoData.

        Raises:
            DtedIOError: File missing, unreadable, not a file, or empty
            InsufficientMemoryError: Grid exceeds ``max_bytes``
            FormatError: A header record is truncated or malformed
            DataBlockError: A data block is truncated or malformed
        """
        geo = self._load_path(Path(file_path))
        _report_voids(geo, stacklevel=2)
        return geo

    def load_bytes(self, data: bytes, source: str = "<bytes>") -> GeoData:
        """Decode an in-memory DTED buffer.

        Args:
            data: Complete file contents
            source: Name recorded as ``GeoData.source_path`` and in warnings
        """
        geo = self._decode(data, source)
        _report_voids(geo, stacklevel=2)
        return geo

    def _load_path(self, path: Path) -> GeoData:
        return self._decode(self._read(path), str(path))

    def _decode(self, data: bytes, source: str) -> GeoData:
        name = Path(source).name

        uhl = parse_user_header_label(_record_region(data, 0, UHL_SIZE, UHL_KIND))
        dsi = parse_data_set_identification(
            _record_region(data, UHL_SIZE, DSI_SIZE, DSI_KIND)
        )
        acc = parse_accuracy_description(
            _record_region(data, UHL_SIZE + DSI_SIZE, ACC_SIZE, ACC_KIND)
        )

        columns, rows = dsi.shape.columns, dsi.shape.rows
        if uhl.shape != dsi.shape:
            logger.debug(
                "DEM %s: UHL shape %s differs from DSI shape %s; using DSI",
                name,
                uhl.shape,
                dsi.shape,
            )

        # Memory budget check BEFORE allocation
        if self.max_bytes is not None:
            est_bytes = columns * rows * 2  # int16 = 2 bytes
            if est_bytes > self.max_bytes:
                raise InsufficientMemoryError(
                    f"Estimated grid size {est_bytes}B exceeds budget "
                    f"{self.max_bytes}B"
                )

        blocks = self._parse_blocks(data, columns, rows)

        try:
            grid = np.stack([block.elevations for block in blocks])
        except MemoryError as e:
            raise InsufficientMemoryError("Insufficient memory to build grid") from e

        geo = GeoData(
            uhl=uhl, dsi=dsi, acc=acc, elevation_grid=grid, source_path=source
        )

        logger.debug("DEM %s: Loaded %dx%d grid", name, columns, rows)
        return geo

    def _read(self, path: Path) -> bytes:
        try:
            st = path.stat()
        except OSError as e:
            # Log only filename, errno, and strerror to avoid leaking paths
            logger.error(
                "Failed to stat %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise DtedIOError(f"Cannot open {path.name}: {e.strerror}") from e

        if not path.is_file():
            raise DtedIOError(f"Not a regular file: {path.name}")
        if st.st_size == 0:
            raise DtedIOError("Empty file")
        # Pre-flight size check: file size is close to the grid size, so a
        # file over 2x budget is certainly too large
        if self.max_bytes is not None and st.st_size > self.max_bytes * 2:
            raise InsufficientMemoryError(
                f"File size {st.st_size}B exceeds 2x memory budget {self.max_bytes}B"
            )

        try:
            data = path.read_bytes()
        except MemoryError as e:
            raise InsufficientMemoryError("Insufficient memory to read file") from e
        except OSError as e:
            raise DtedIOError(f"Cannot read {path.name}: {e.strerror}") from e

        if not data:
            raise DtedIOError("Empty file")
        return data

    def _parse_blocks(self, data: bytes, columns: int, rows: int) -> list[DataBlock]:
        length = block_length(rows)
        blocks: list[DataBlock] = []
        for index in range(columns):
            start = HEADER_SIZE + index * length
            # A short tail is handed over as-is: sentinel first, then length
            end = min(start + length, len(data))
            raw = slice_bytes(data, min(start, end), end)
            blocks.append(
                parse_data_block(
                    raw, index, rows=rows, verify_checksum=self.verify_checksums
                )
            )

        trailing = len(data) - (HEADER_SIZE + columns * length)
        if trailing > 0:
            logger.debug("Ignoring %d trailing bytes after last data block", trailing)
        return blocks


def load(file_path: Path | str) -> GeoData:
    """Load a DTED tile with default adapter settings.

    Example:
        >>> geo = load("n46.dt1")
        >>> geo.get_elevation(46.5, 7.25)
        1843
    """
    geo = DtedTerrainAdapter()._load_path(Path(file_path))
    _report_voids(geo, stacklevel=2)
    return geo

"""Terrain Bounded Context - Value Objects.

Immutable data structures for DTED metadata records and elevation grids.
All validation occurs at construction time via Pydantic.

Records mirror the three DTED header records:
- UserHeaderLabel (UHL)
- DataSetIdentification (DSI)
- AccuracyDescription (ACC)

GeoData is the aggregate root returned by the DTED adapter.
"""

from __future__ import annotations

import logging
import sys
import warnings

import numpy as np
from affine import Affine
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.terrain.errors import CoordinateRangeWarning
from domain.terrain.services import (
    derive_ground_spacing_m,
    is_within_coverage,
    nearest_elevation,
    sample_transform,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Numeric Constants
# ---------------------------------------------------------------------------
VOID_ELEVATION = -32767  # DTED "no data" sample, typically over open water


def _caller_stacklevel() -> int:
    """Return the warnings stacklevel of the code constructing a model.

    Counted from the function that calls this helper. Frames inside pydantic
    and this module are skipped, so the warning is charged to the decoder or
    user code that built the Value Object.
    """
    level = 1
    frame = sys._getframe(1)
    while frame.f_back is not None:
        module = frame.f_globals.get("__name__", "")
        if module != __name__ and not module.startswith("pydantic"):
            break
        frame = frame.f_back
        level += 1
    return level


class BoundingBox(BaseModel):
    """Geographic extent in EPSG:4326 (Value Object).

    Invariants are enforced at construction time - invalid BoundingBox
    cannot be instantiated.
    """

    min_x: float  # Western boundary (longitude)
    min_y: float  # Southern boundary (latitude)
    max_x: float  # Eastern boundary (longitude)
    max_y: float  # Northern boundary (latitude)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_bounds(self) -> "BoundingBox":
        # Longitude range
        if not (-180 <= self.min_x <= 180):
            raise ValueError(f"min_x longitude out of range: {self.min_x}")
        if not (-180 <= self.max_x <= 180):
            raise ValueError(f"max_x longitude out of range: {self.max_x}")
        # Latitude range
        if not (-90 <= self.min_y <= 90):
            raise ValueError(f"min_y latitude out of range: {self.min_y}")
        if not (-90 <= self.max_y <= 90):
            raise ValueError(f"max_y latitude out of range: {self.max_y}")
        # Ordering
        if not (self.min_x < self.max_x):
            raise ValueError(
                f"Invalid x ordering: min_x={self.min_x} >= max_x={self.max_x}"
            )
        if not (self.min_y < self.max_y):
            raise ValueError(
                f"Invalid y ordering: min_y={self.min_y} >= max_y={self.max_y}"
            )
        return self


# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------
class LatitudeLongitude(BaseModel):
    """Geographic coordinate in decimal degrees (Value Object).

    Out-of-range values are flagged with CoordinateRangeWarning but not
    rejected: DTED headers in the wild occasionally carry them and the
    coordinate is still usable for containment checks.
    """

    latitude: float
    longitude: float

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def flag_out_of_range(self) -> "LatitudeLongitude":
        problems = []
        if not (-90 <= self.latitude <= 90):
            problems.append(f"latitude {self.latitude}")
        if not (-180 <= self.longitude <= 180):
            problems.append(f"longitude {self.longitude}")
        if problems:
            detail = ", ".join(problems)
            logger.warning("Coordinate out of range: %s", detail)
            warnings.warn(
                f"Coordinate out of range: {detail}",
                CoordinateRangeWarning,
                stacklevel=_caller_stacklevel(),
            )
        return self


class DMSCoordinate(BaseModel):
    """Degrees, minutes, seconds (intermediate Value Object).

    The sign is not part of the DMS value; it is applied by the caller from
    the hemisphere letter.
    """

    degrees: int = Field(ge=0)
    minutes: int = Field(ge=0)
    seconds: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    def to_decimal(self) -> float:
        """Return unsigned decimal degrees."""
        return self.degrees + (self.minutes + self.seconds / 60.0) / 60.0


class Shape(BaseModel):
    """Grid dimensions (Value Object).

    columns = number of longitude lines, rows = number of latitude lines.
    """

    columns: int = Field(ge=0)
    rows: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Header Records
# ---------------------------------------------------------------------------
class UserHeaderLabel(BaseModel):
    """User Header Label record (80 bytes, sentinel ``UHL1``).

    Intervals are in arc-seconds (stored on disk in tenths).
    """

    origin: LatitudeLongitude
    longitude_interval: float
    latitude_interval: float
    vertical_accuracy: int | None = None  # None when the field reads "NA"
    security_code: str
    reference: str
    shape: Shape
    multiple_accuracy: bool

    model_config = ConfigDict(frozen=True)


class DataSetIdentification(BaseModel):
    """Data Set Identification record (648 bytes, sentinel ``DSI``).

    Date fields hold the literal 4-character text (YYMM); they are not
    validated as calendar dates.
    """

    security_code: str
    release_markings: str
    handling_description: str
    product_level: str
    reference: str
    edition: str
    merge_version: str
    maintenance_date: str
    merge_date: str
    maintenance_code: str
    producer_code: str
    product_specification: str
    specification_date: str
    vertical_datum: str
    horizontal_datum: str
    collection_system: str
    compilation_date: str
    origin: LatitudeLongitude
    south_west: LatitudeLongitude
    north_west: LatitudeLongitude
    north_east: LatitudeLongitude
    south_east: LatitudeLongitude
    orientation: float  # decimal degrees
    latitude_interval: float  # arc-seconds
    longitude_interval: float  # arc-seconds
    shape: Shape
    coverage: float = Field(default=1.0, gt=0, le=1)  # fraction of cell with data

    model_config = ConfigDict(frozen=True)


class AccuracyDescription(BaseModel):
    """Accuracy Description record (2700 bytes, sentinel ``ACC``).

    Each figure is None when the file does not state it (e.g. "NA  ").
    """

    absolute_horizontal: int | None = None
    absolute_vertical: int | None = None
    relative_horizontal: int | None = None
    relative_vertical: int | None = None

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Elevation Data
# ---------------------------------------------------------------------------
class DataBlock(BaseModel):
    """One decoded elevation data block: a single grid column (Value Object).

    Elevations are int16 meters, south to north, already converted from
    sign-magnitude. The array is read-only.
    """

    index: int = Field(ge=0)
    block_count: int
    longitude_count: int
    latitude_count: int
    checksum: int
    elevations: NDArray[np.int16]

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def freeze_elevations(self) -> "DataBlock":
        if self.elevations.ndim != 1:
            raise ValueError(f"Elevations must be 1D, got {self.elevations.ndim}D")
        immutable = np.array(self.elevations, dtype=np.int16, copy=True)
        immutable.flags.writeable = False
        object.__setattr__(self, "elevations", immutable)
        return self


class GeoData(BaseModel):
    """Decoded DTED tile (Aggregate Root).

    The elevation grid is indexed ``[column][row]``, i.e.
    ``[longitude_index][latitude_index]``, with column 0 at the western edge
    and row 0 at the southern edge. The grid is copied and made read-only at
    construction time.

    Elevation queries return the nearest grid sample; no interpolation is
    performed.
    """

    uhl: UserHeaderLabel
    dsi: DataSetIdentification
    acc: AccuracyDescription
    elevation_grid: NDArray[np.int16]  # 2D (columns x rows), read-only
    source_path: str

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_grid(self) -> "GeoData":
        # 2D array
        if self.elevation_grid.ndim != 2:
            raise ValueError(
                f"Elevation grid must be 2D, got {self.elevation_grid.ndim}D"
            )
        # dtype
        if self.elevation_grid.dtype != np.int16:
            raise ValueError(
                f"Elevation grid must be int16, got {self.elevation_grid.dtype}"
            )
        # Shape matches DSI (columns x rows)
        expected = (self.dsi.shape.columns, self.dsi.shape.rows)
        if self.elevation_grid.shape != expected:
            raise ValueError(
                f"Elevation grid shape {self.elevation_grid.shape} does not match "
                f"DSI shape {expected}"
            )

        immutable = np.array(self.elevation_grid, dtype=np.int16, copy=True, order="C")
        immutable.flags.writeable = False
        object.__setattr__(self, "elevation_grid", immutable)

        return self

    @property
    def shape(self) -> Shape:
        """Grid dimensions from the DSI record."""
        return self.dsi.shape

    @property
    def bounds(self) -> BoundingBox:
        """Coverage extent from the DSI south-west and north-east corners.

        Loading only warns about out-of-range corners, but BoundingBox is
        strict: such a tile still loads and answers queries, and only this
        accessor fails.

        Raises:
            pydantic.ValidationError: If a corner lies outside the valid
                lat/lon range or the corners do not span a positive extent
        """
        return BoundingBox(
            min_x=self.dsi.south_west.longitude,
            min_y=self.dsi.south_west.latitude,
            max_x=self.dsi.north_east.longitude,
            max_y=self.dsi.north_east.latitude,
        )

    @property
    def void_count(self) -> int:
        """Number of void (-32767) samples in the grid."""
        return int(np.count_nonzero(self.elevation_grid == VOID_ELEVATION))

    @property
    def transform(self) -> Affine:
        """Affine mapping (column, row) sample indices to (lon, lat) degrees."""
        return sample_transform(self.dsi)

    def contains(self, lat: float, lon: float) -> bool:
        """Return True if (lat, lon) lies within the tile (inclusive)."""
        return is_within_coverage(self.dsi, lat, lon)

    def get_elevation(self, lat: float, lon: float) -> int | None:
        """Return the nearest-sample elevation in meters, or None if uncovered.

        Nearest-neighbor sampling: the value of the closest grid post is
        returned as stored, void values included.
        """
        return nearest_elevation(self, lat, lon)

    def ground_spacing_m(self) -> tuple[float, float]:
        """Return (x, y) size of one sample step in meters at the tile centre."""
        return derive_ground_spacing_m(self.dsi)

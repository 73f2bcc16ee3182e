"""Terrain Bounded Context - Domain Services.

Pure domain logic for elevation queries over decoded DTED tiles.
NO I/O operations - file loading is implemented by infrastructure adapters
under `src/infrastructure/terrain/dted_adapter.py` via domain ports.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from affine import Affine
from pyproj import Geod

if TYPE_CHECKING:
    from domain.terrain.value_objects import DataSetIdentification, GeoData

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
ARCSEC_PER_DEGREE = 3600.0

# WGS84 ellipsoid for geodesic calculations (same as GPS, EPSG:4326)
_geod = Geod(ellps="WGS84")


# ---------------------------------------------------------------------------
# Helper: Coverage Check
# ---------------------------------------------------------------------------
def is_within_coverage(
    dsi: DataSetIdentification | None, lat: float, lon: float
) -> bool:
    """Check if a point is within the tile's DSI corners (inclusive).

    Uses the south-west corner as the lower bound and the north-east corner
    as the upper bound on both axes. Points exactly on an edge or corner are
    inside.
    """
    if dsi is None:
        return False
    return (
        dsi.south_west.latitude <= lat <= dsi.north_east.latitude
        and dsi.south_west.longitude <= lon <= dsi.north_east.longitude
    )


# ---------------------------------------------------------------------------
# Nearest-Sample Lookup
# ---------------------------------------------------------------------------
def nearest_sample_index(value: float, origin: float, count: int) -> int:
    """Return the nearest grid line index for a coordinate.

    The offset from the origin (in degrees) is scaled by ``count - 1`` and
    rounded half up, so a one-degree tile maps its far edge to the last line.
    """
    return int(math.floor((value - origin) * (count - 1) + 0.5))


def nearest_elevation(geo: GeoData, lat: float, lon: float) -> int | None:
    """Return the elevation of the grid sample nearest to (lat, lon).

    Nearest-neighbor sampling only: the stored sample is returned unchanged,
    including the void value. Returns None for points outside the coverage
    and for indices that fall outside the grid (corners inconsistent with
    the origin).

    Args:
        geo: Decoded DTED tile
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees

    Returns:
        Elevation in meters, or None
    """
    if not is_within_coverage(geo.dsi, lat, lon):
        return None

    columns, rows = geo.dsi.shape.columns, geo.dsi.shape.rows
    lon_index = nearest_sample_index(lon, geo.dsi.origin.longitude, columns)
    lat_index = nearest_sample_index(lat, geo.dsi.origin.latitude, rows)

    if not (0 <= lon_index < columns and 0 <= lat_index < rows):
        logger.debug(
            "Sample index (%d, %d) outside %dx%d grid for (%.6f, %.6f)",
            lon_index,
            lat_index,
            columns,
            rows,
            lat,
            lon,
        )
        return None

    return int(geo.elevation_grid[lon_index, lat_index])


# ---------------------------------------------------------------------------
# Grid Geometry
# ---------------------------------------------------------------------------
def sample_transform(dsi: DataSetIdentification) -> Affine:
    """Build the affine transform from (column, row) indices to (lon, lat).

    Column 0 / row 0 is the DSI origin (south-west post); rows grow north.
    """
    origin = Affine.translation(dsi.origin.longitude, dsi.origin.latitude)
    return origin * Affine.scale(
        dsi.longitude_interval / ARCSEC_PER_DEGREE,
        dsi.latitude_interval / ARCSEC_PER_DEGREE,
    )


def geodesic_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate geodesic distance between two points in meters.

    Uses WGS84 ellipsoid for millimeter-level precision.
    """
    _, _, distance = _geod.inv(lon1, lat1, lon2, lat2)
    return float(abs(distance))  # Ensure positive, explicit float


def derive_ground_spacing_m(dsi: DataSetIdentification) -> tuple[float, float]:
    """Measure the ground size of one sample step at the tile centre.

    Args:
        dsi: Data Set Identification with corners and intervals

    Returns:
        (x_spacing_m, y_spacing_m): east-west and north-south step in meters
    """
    mid_lat = (dsi.south_west.latitude + dsi.north_east.latitude) / 2
    mid_lon = (dsi.south_west.longitude + dsi.north_east.longitude) / 2

    x_step = dsi.longitude_interval / ARCSEC_PER_DEGREE
    y_step = dsi.latitude_interval / ARCSEC_PER_DEGREE

    # One sample east, one sample south
    x_m = geodesic_distance(mid_lat, mid_lon, mid_lat, mid_lon + x_step)
    y_m = geodesic_distance(mid_lat, mid_lon, mid_lat - y_step, mid_lon)
    return (x_m, y_m)

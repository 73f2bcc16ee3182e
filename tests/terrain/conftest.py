"""Pytest configuration for terrain domain tests.

Domain tests build GeoData directly from Value Objects and numpy arrays,
without decoding any bytes. This keeps them independent of the DTED
infrastructure adapter.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest
from numpy.typing import ArrayLike

from domain.terrain.value_objects import (
    AccuracyDescription,
    DataSetIdentification,
    GeoData,
    LatitudeLongitude,
    Shape,
    UserHeaderLabel,
)


def make_dsi(
    origin_lat: float,
    origin_lon: float,
    columns: int,
    rows: int,
    span_deg: float = 1.0,
    coverage: float = 1.0,
) -> DataSetIdentification:
    """Create a DSI record for a square tile anchored at its south-west post."""
    north, east = origin_lat + span_deg, origin_lon + span_deg
    lon_interval = span_deg * 3600 / max(columns - 1, 1)
    lat_interval = span_deg * 3600 / max(rows - 1, 1)
    return DataSetIdentification(
        security_code="U",
        release_markings="",
        handling_description="",
        product_level="DTED1",
        reference="TEST",
        edition="01",
        merge_version="A",
        maintenance_date="0000",
        merge_date="0000",
        maintenance_code="0000",
        producer_code="TEST",
        product_specification="MIL-PRF-890",
        specification_date="0005",
        vertical_datum="MSL",
        horizontal_datum="WGS84",
        collection_system="TEST",
        compilation_date="9901",
        origin=LatitudeLongitude(latitude=origin_lat, longitude=origin_lon),
        south_west=LatitudeLongitude(latitude=origin_lat, longitude=origin_lon),
        north_west=LatitudeLongitude(latitude=north, longitude=origin_lon),
        north_east=LatitudeLongitude(latitude=north, longitude=east),
        south_east=LatitudeLongitude(latitude=origin_lat, longitude=east),
        orientation=0.0,
        latitude_interval=lat_interval,
        longitude_interval=lon_interval,
        shape=Shape(columns=columns, rows=rows),
        coverage=coverage,
    )


def make_geodata(
    elevations: ArrayLike,
    origin_lat: float = 0.0,
    origin_lon: float = 0.0,
    span_deg: float = 1.0,
) -> GeoData:
    """Create a GeoData from a [column][row] elevation array (no I/O)."""
    grid = np.asarray(elevations, dtype=np.int16)
    columns, rows = grid.shape
    dsi = make_dsi(origin_lat, origin_lon, columns, rows, span_deg=span_deg)
    uhl = UserHeaderLabel(
        origin=dsi.origin,
        longitude_interval=dsi.longitude_interval,
        latitude_interval=dsi.latitude_interval,
        vertical_accuracy=None,
        security_code="U",
        reference="TEST",
        shape=dsi.shape,
        multiple_accuracy=False,
    )
    return GeoData(
        uhl=uhl,
        dsi=dsi,
        acc=AccuracyDescription(),
        elevation_grid=grid,
        source_path="memory.dt1",
    )


@pytest.fixture
def geodata_factory() -> Callable[..., GeoData]:
    """Factory fixture for GeoData built directly from arrays."""
    return make_geodata


@pytest.fixture
def tile_2x2() -> GeoData:
    """Unit tile at (0, 0): SW=100, NW=200, SE=300, NE=400."""
    return make_geodata([[100, 200], [300, 400]])


@pytest.fixture
def dsi_factory() -> Callable[..., DataSetIdentification]:
    """Factory fixture for DSI records of square tiles."""
    return make_dsi

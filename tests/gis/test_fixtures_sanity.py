"""Sanity tests for the synthetic DTED fixtures.

These tests validate that scripts/gen_fixtures.py:
1. Writes exactly the fixtures listed in shared/fixtures_expected.py
2. Produces loadable tiles with the expected shape and values
3. Produces rejected files that fail with the expected error

These are NOT behavioral tests of the decoder - those live in
test_dted_adapter.py.

Run: pytest tests/gis/test_fixtures_sanity.py -m integration
"""

import runpy
import warnings
from pathlib import Path

import pytest

from domain.terrain.errors import (
    BadBlockSentinelError,
    DtedIOError,
    TruncatedRecordError,
    VoidDataWarning,
)
from infrastructure.terrain import DtedTerrainAdapter
from shared.fixtures_expected import (
    EXPECTED_FIXTURE_COUNT,
    EXPECTED_FIXTURES,
    KNOWN_2X2,
    LOADABLE_FIXTURES,
)

# Mark all tests in this module as integration tests
pytestmark = pytest.mark.integration

SCRIPT = Path(__file__).parent.parent.parent / "scripts" / "gen_fixtures.py"


# =============================================================================
# Helpers
# =============================================================================
@pytest.fixture(scope="module")
def fixtures_dir(tmp_path_factory) -> Path:
    """Generate every fixture once into a temporary directory."""
    out_dir = tmp_path_factory.mktemp("fixtures")
    namespace = runpy.run_path(str(SCRIPT))
    namespace["generate_all"](out_dir)
    return out_dir


def _load(path: Path):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", VoidDataWarning)
        return DtedTerrainAdapter().load_dem(path)


# =============================================================================
# Fixture inventory
# =============================================================================
def test_all_expected_fixtures_generated(fixtures_dir):
    names = sorted(p.name for p in fixtures_dir.iterdir())
    assert names == EXPECTED_FIXTURES
    assert len(names) == EXPECTED_FIXTURE_COUNT


def test_loadable_fixtures_are_expected():
    assert set(LOADABLE_FIXTURES) <= set(EXPECTED_FIXTURES)


@pytest.mark.parametrize("name", LOADABLE_FIXTURES)
def test_loadable_fixture_loads(fixtures_dir, name):
    geo = _load(fixtures_dir / name)
    assert geo.elevation_grid.shape == (geo.shape.columns, geo.shape.rows)


# =============================================================================
# Loadable fixtures
# =============================================================================
def test_known_2x2(fixtures_dir):
    geo = _load(fixtures_dir / "n00_e000_2x2.dt1")
    assert geo.elevation_grid.tolist() == KNOWN_2X2
    assert geo.acc.absolute_horizontal == 25
    assert geo.acc.absolute_vertical == 10


def test_void_tile(fixtures_dir):
    with pytest.warns(VoidDataWarning):
        geo = DtedTerrainAdapter().load_dem(fixtures_dir / "n00_e000_void.dt1")
    assert geo.void_count == 2


def test_gradient_11x11(fixtures_dir):
    geo = _load(fixtures_dir / "n46_e007_11x11.dt1")
    assert geo.elevation_grid.shape == (11, 11)
    assert int(geo.elevation_grid.min()) == -50
    assert int(geo.elevation_grid.max()) == 1050
    assert geo.dsi.coverage == pytest.approx(0.75)
    assert geo.dsi.latitude_interval == pytest.approx(360.0)
    assert geo.get_elevation(46.0, 7.0) == -50
    assert geo.get_elevation(47.0, 8.0) == 1050


def test_south_west_hemisphere(fixtures_dir):
    geo = _load(fixtures_dir / "s01_w001_2x2.dt1")
    assert geo.dsi.origin.latitude == pytest.approx(-1.0)
    assert geo.dsi.origin.longitude == pytest.approx(-1.0)
    assert geo.uhl.origin.latitude == pytest.approx(-1.0)
    assert geo.contains(-0.5, -0.5)
    assert not geo.contains(0.5, 0.5)


# =============================================================================
# Rejected fixtures
# =============================================================================
@pytest.mark.parametrize(
    "name, error",
    [
        ("bad_block_sentinel.dt1", BadBlockSentinelError),
        ("empty.dt1", DtedIOError),
        ("truncated_acc.dt1", TruncatedRecordError),
    ],
)
def test_rejected_fixture(fixtures_dir, name, error):
    assert name not in LOADABLE_FIXTURES
    with pytest.raises(error):
        DtedTerrainAdapter().load_dem(fixtures_dir / name)

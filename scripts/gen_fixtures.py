#!/usr/bin/env python3
"""Generate synthetic DTED fixtures for manual and integration testing.

Fixtures are minimal synthetic tiles - not real terrain data.

Usage:
    PYTHONPATH=. python scripts/gen_fixtures.py [output_dir]

Output:
    tests/fixtures/*.dt1 (default)

Dependencies:
    This script imports from shared/ (not tests/) to avoid circular
    dependencies between scripts and tests packages.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import numpy as np

from shared.dted_builder import block_offset, build_dted
from shared.fixtures_expected import (
    EXPECTED_FIXTURE_COUNT,
    EXPECTED_FIXTURES,
    KNOWN_2X2,
)

# Output directory
FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"


def known_2x2() -> bytes:
    return build_dted(KNOWN_2X2, accuracy=(25, 10, 15, 5))


def void_tile() -> bytes:
    return build_dted([[10, -32767], [-32767, 40]])


def gradient_11x11() -> bytes:
    # Column-major: elevation rises east and north, dips below sea level in the SW
    cols = np.arange(11).reshape(-1, 1)
    rows = np.arange(11).reshape(1, -1)
    grid = cols * 100 + rows * 10 - 50
    return build_dted(grid, origin_lat=46.0, origin_lon=7.0, coverage=75)


def south_west_2x2() -> bytes:
    return build_dted(KNOWN_2X2, origin_lat=-1.0, origin_lon=-1.0)


def bad_block_sentinel() -> bytes:
    data = bytearray(build_dted(KNOWN_2X2))
    data[block_offset(1, 2)] = 0x00
    return bytes(data)


def truncated_acc() -> bytes:
    # 80 (UHL) + 648 (DSI) + part of ACC
    return build_dted(KNOWN_2X2)[:1000]


def empty() -> bytes:
    return b""


GENERATORS: dict[str, Callable[[], bytes]] = {
    "bad_block_sentinel.dt1": bad_block_sentinel,
    "empty.dt1": empty,
    "n00_e000_2x2.dt1": known_2x2,
    "n00_e000_void.dt1": void_tile,
    "n46_e007_11x11.dt1": gradient_11x11,
    "s01_w001_2x2.dt1": south_west_2x2,
    "truncated_acc.dt1": truncated_acc,
}


def generate_all(out_dir: Path = FIXTURES_DIR) -> list[Path]:
    """Write every expected fixture to ``out_dir`` and return the paths."""
    if sorted(GENERATORS) != EXPECTED_FIXTURES:
        raise RuntimeError("GENERATORS out of sync with EXPECTED_FIXTURES")

    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for name in EXPECTED_FIXTURES:
        path = out_dir / name
        path.write_bytes(GENERATORS[name]())
        written.append(path)

    if len(written) != EXPECTED_FIXTURE_COUNT:
        raise RuntimeError(
            f"Expected {EXPECTED_FIXTURE_COUNT} fixtures, wrote {len(written)}"
        )
    return written


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    out_dir = Path(args[0]) if args else FIXTURES_DIR
    for path in generate_all(out_dir):
        print(f"  wrote {path.name} ({path.stat().st_size} bytes)")
    print(f"Generated {EXPECTED_FIXTURE_COUNT} fixtures in {out_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

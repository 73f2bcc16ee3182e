"""Pytest configuration for DTED infrastructure tests.

This conftest is for tests/gis/ directory only. Header records are built
with the shared synthetic builder for a typical DTED Level 1 tile:
origin 46N 7E, 1201 x 1201 posts, 3 arc-second spacing.
"""

from __future__ import annotations

import pytest

from shared.dted_builder import build_acc, build_dsi, build_uhl

LEVEL1_POSTS = 1201
LEVEL1_INTERVAL = 30  # tenths of arc-seconds


@pytest.fixture
def uhl_bytes() -> bytes:
    return build_uhl(
        46.0,
        7.0,
        LEVEL1_POSTS,
        LEVEL1_POSTS,
        lon_interval=LEVEL1_INTERVAL,
        lat_interval=LEVEL1_INTERVAL,
        vertical_accuracy=30,
        reference="REF0001",
    )


@pytest.fixture
def dsi_bytes() -> bytes:
    return build_dsi(
        46.0,
        7.0,
        LEVEL1_POSTS,
        LEVEL1_POSTS,
        lon_interval=LEVEL1_INTERVAL,
        lat_interval=LEVEL1_INTERVAL,
        maintenance_date="0203",
        merge_date="0104",
        compilation_date="9912",
    )


@pytest.fixture
def acc_bytes() -> bytes:
    return build_acc(50, 30, 20, 10)

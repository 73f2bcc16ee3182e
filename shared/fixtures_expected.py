"""Single source of truth for expected DTED test fixtures.

This module defines the list of expected fixture filenames used by both:
- scripts/gen_fixtures.py (generation verification)
- tests/gis/test_fixtures_sanity.py (generation and load verification)

Location: shared/ (not tests/) to avoid scripts->tests dependency.

When adding/removing fixtures, update ONLY this list.
"""

from __future__ import annotations

# Expected fixtures - SINGLE SOURCE OF TRUTH
# Sorted alphabetically for deterministic comparison.
EXPECTED_FIXTURES: list[str] = sorted(
    [
        "bad_block_sentinel.dt1",  # Second data block does not start with 0xAA
        "empty.dt1",  # Empty file rejection
        "n00_e000_2x2.dt1",  # Known values, unit tile at the origin
        "n00_e000_void.dt1",  # Contains the void value (-32767)
        "n46_e007_11x11.dt1",  # Gradient, negative elevations, partial coverage
        "s01_w001_2x2.dt1",  # Southern/western hemisphere signs
        "truncated_acc.dt1",  # File ends inside the ACC record
    ]
)

# Files that load successfully; the rest must be rejected
LOADABLE_FIXTURES: list[str] = sorted(
    [
        "n00_e000_2x2.dt1",
        "n00_e000_void.dt1",
        "n46_e007_11x11.dt1",
        "s01_w001_2x2.dt1",
    ]
)

# Known 2x2 grid, indexed [column][row]
KNOWN_2X2: list[list[int]] = [[100, 200], [300, 400]]

# Count derived from list for verification
EXPECTED_FIXTURE_COUNT: int = len(EXPECTED_FIXTURES)

"""Root pytest configuration for all tests.

Provides fixtures that build synthetic DTED files with the shared builder
(shared/dted_builder.py) so no binary fixtures need to be checked in.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from shared.dted_builder import build_dted
from shared.fixtures_expected import KNOWN_2X2


@pytest.fixture
def write_dted(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: write raw bytes (or build a tile) into tmp_path.

    Usage:
        path = write_dted("n00.dt1", data=b"...")
        path = write_dted("n00.dt1", elevations=[[1, 2], [3, 4]])
    """

    def _write(name: str, data: bytes | None = None, **build_kwargs) -> Path:
        if data is None:
            data = build_dted(**build_kwargs)
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def known_2x2_bytes() -> bytes:
    """Complete 2x2 tile at (0, 0) spanning one degree."""
    return build_dted(KNOWN_2X2, accuracy=(25, 10, 15, 5))

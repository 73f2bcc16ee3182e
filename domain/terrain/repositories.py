"""Domain Port(s) for Terrain I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .value_objects import GeoData


class TerrainRepository(Protocol):
    """Port for obtaining decoded elevation tiles from external sources.

    Implementations live in infrastructure (e.g., DTED adapter).
    """

    def load_dem(self, file_path: Path | str) -> GeoData:
        """Load an elevation tile and return a fully populated GeoData."""
        ...

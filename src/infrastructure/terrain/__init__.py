"""Infrastructure adapters for the terrain bounded context.

This module provides the infrastructure layer implementations for terrain
operations: decoding DTED tiles into GeoData.

Adapter and load() exported for simplified imports.
"""

from .dted_adapter import DtedTerrainAdapter, load

__all__ = ["DtedTerrainAdapter", "load"]

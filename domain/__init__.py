"""DTED Reader Domain Layer.

This package contains the core logic organized by bounded contexts:
- terrain: DTED header records, elevation grids, nearest-sample queries
"""

from domain import terrain

__all__ = ["terrain"]

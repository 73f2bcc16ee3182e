"""Shared constants and utilities used by both scripts and tests.

This package provides a dependency-light location for the synthetic DTED
builder and fixture catalogue shared across packages without creating
circular imports.
"""

from __future__ import annotations

"""Mosaic Grids — a shareable grid toggle toy.

The grid's dimensions, colours and cell pattern travel in a compact,
URL-safe token so any mosaic can be shared as a single link.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]

"""Rendering contract for mosaic grids.

A canvas is whatever surface the grid is drawn on.  The session hands it a
:class:`Palette` once, draws the full grid once, and then reports single
cell changes as the user toggles them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from mosaic.codec.grid_config import Grid, GridConfig


@dataclass(frozen=True)
class Palette:
    """Colours and dimensions derived from a configuration."""

    fore_color: str
    """Chrome foreground (headers, buttons)."""
    back_color: str
    """Chrome background (page body, dialogs)."""
    on_color: str
    """Fill for cells whose state is ``True``."""
    off_color: str
    cell_size: int
    """Cell edge in pixels."""
    canvas_size: int
    """Whole grid edge in pixels (``count * size``)."""


def palette_for(config: GridConfig) -> Palette:
    """Derive the palette for *config*; ``inverse`` swaps the cell fills."""
    on_color, off_color = config.fore_color, config.back_color
    if config.inverse:
        on_color, off_color = off_color, on_color
    return Palette(
        fore_color=config.fore_color,
        back_color=config.back_color,
        on_color=on_color,
        off_color=off_color,
        cell_size=config.size,
        canvas_size=config.count * config.size,
    )


class BaseCanvas(ABC):
    """Abstract drawing surface driven by :class:`~mosaic.web.session.MosaicSession`."""

    @abstractmethod
    def apply_palette(self, palette: Palette) -> None:
        """Install the colours and dimensions used by later draws."""

    @abstractmethod
    def draw(self, states: Grid) -> None:
        """Draw the full grid."""

    @abstractmethod
    def update_cell(self, row: int, col: int, value: bool) -> None:
        """Reflect a single cell change."""

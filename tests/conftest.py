"""Shared test fixtures for Mosaic.

Provides ready-made configurations and a recording canvas so individual
test modules stay focused.
"""

from __future__ import annotations

import io

import numpy as np
import pytest
from rich.console import Console

from mosaic.codec.grid_config import Grid, GridConfig
from mosaic.config.settings import RenderSettings
from mosaic.interfaces.canvas import BaseCanvas, Palette
from mosaic.interfaces.terminal_ui import MOSAIC_THEME, TerminalCanvas

# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def default_config() -> GridConfig:
    return GridConfig()


@pytest.fixture()
def corner_config() -> GridConfig:
    """3x3 grid with only the top-left cell on; token ``3!14!0000!____!40``."""
    states = np.zeros((3, 3), dtype=bool)
    states[0, 0] = True
    return GridConfig(count=3, size=20, states=states)


# ---------------------------------------------------------------------------
# Canvases
# ---------------------------------------------------------------------------


class RecordingCanvas(BaseCanvas):
    """Canvas stub that remembers every call."""

    def __init__(self) -> None:
        self.palette: Palette | None = None
        self.drawn: list[Grid] = []
        self.updates: list[tuple[int, int, bool]] = []

    def apply_palette(self, palette: Palette) -> None:
        self.palette = palette

    def draw(self, states: Grid) -> None:
        self.drawn.append(states.copy())

    def update_cell(self, row: int, col: int, value: bool) -> None:
        self.updates.append((row, col, value))


@pytest.fixture()
def recording_canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture()
def console() -> Console:
    """A Rich console that records output instead of writing to a terminal."""
    return Console(
        file=io.StringIO(),
        record=True,
        width=120,
        theme=MOSAIC_THEME,
        color_system=None,
    )


@pytest.fixture()
def terminal_canvas(console: Console) -> TerminalCanvas:
    render = RenderSettings(cell_width=1, on_glyph="#", off_glyph=".", show_border=False)
    return TerminalCanvas(console=console, render=render)

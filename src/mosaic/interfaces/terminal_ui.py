"""Rich terminal canvas for mosaic grids.

``TerminalCanvas`` implements the canvas contract on top of a Rich
console: each cell is a run of block glyphs painted in the palette's on or
off colour.  It also renders the configuration summary and the error panel
shown for rejected URLs.
"""

from __future__ import annotations

import numpy as np
from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from mosaic.codec.grid_config import Grid, GridConfig
from mosaic.config.settings import RenderSettings, get_settings
from mosaic.interfaces.canvas import BaseCanvas, Palette

# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

MOSAIC_THEME = Theme(
    {
        "mosaic.name": "bold cyan",
        "mosaic.dim": "dim white",
        "mosaic.success": "bold green",
        "mosaic.error": "bold red",
        "mosaic.warning": "bold yellow",
        "mosaic.key": "bold white",
    }
)


class TerminalCanvas(BaseCanvas):
    """Draws the grid to a Rich console."""

    def __init__(
        self,
        console: Console | None = None,
        render: RenderSettings | None = None,
    ) -> None:
        self.console = console or Console(theme=MOSAIC_THEME, highlight=False)
        self.render = render or get_settings().render
        self.palette: Palette | None = None
        self._states: Grid | None = None

    # ------------------------------------------------------------------
    # Canvas contract
    # ------------------------------------------------------------------

    def apply_palette(self, palette: Palette) -> None:
        self.palette = palette

    def draw(self, states: Grid) -> None:
        self._states = np.array(states, dtype=bool)
        self.refresh()

    def update_cell(self, row: int, col: int, value: bool) -> None:
        if self._states is None:
            raise RuntimeError("update_cell() called before draw().")
        self._states[row, col] = value

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_grid(self) -> Text:
        """Build the grid as styled text from the last drawn states."""
        if self.palette is None or self._states is None:
            raise RuntimeError("Nothing to render: call apply_palette() and draw() first.")

        on_style = Style(color=self.palette.on_color)
        off_style = Style(color=self.palette.off_color)
        on_cell = self.render.on_glyph * self.render.cell_width
        off_cell = self.render.off_glyph * self.render.cell_width

        text = Text(no_wrap=True)
        for r, row in enumerate(self._states):
            if r:
                text.append("\n")
            for cell in row:
                if cell:
                    text.append(on_cell, style=on_style)
                else:
                    text.append(off_cell, style=off_style)
        return text

    def refresh(self) -> None:
        """Print the current grid."""
        grid = self.render_grid()
        if self.render.show_border:
            assert self.palette is not None
            self.console.print(Panel.fit(
                grid,
                border_style=Style(color=self.palette.fore_color, bgcolor=self.palette.back_color),
            ))
        else:
            self.console.print(grid)

    # ------------------------------------------------------------------
    # Panels
    # ------------------------------------------------------------------

    def show_config(self, config: GridConfig) -> None:
        """Print a field-by-field summary of *config*."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="mosaic.key")
        table.add_column()
        table.add_row("count", str(config.count))
        table.add_row("size", str(config.size))
        table.add_row("fore-color", str(config.fore_color))
        table.add_row("back-color", str(config.back_color))
        table.add_row("inverse", str(config.inverse))
        states = config.states
        table.add_row("states", "x".join(str(n) for n in states.shape) if states.size else "invalid")
        valid = config.is_valid
        table.add_row(
            "valid",
            Text("yes" if valid else "no", style="mosaic.success" if valid else "mosaic.error"),
        )
        self.console.print(table)

    def show_error(self, message: str) -> None:
        self.console.print(Panel(
            Text(message, style="mosaic.error"),
            title="Mosaic",
            border_style="mosaic.error",
        ))

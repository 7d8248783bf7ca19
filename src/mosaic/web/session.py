"""MosaicSession — one page view's worth of grid state.

The session takes ownership of a validated :class:`GridConfig` and the
canvas it draws on at construction time; neither can be replaced
afterwards.  Every cell mutation writes into ``config.states`` first and
then tells the canvas, so the configuration can be shared at any time.
"""

from __future__ import annotations

import logging

import numpy as np

from mosaic.codec.grid_config import GridConfig, default_states
from mosaic.interfaces.canvas import BaseCanvas, palette_for
from mosaic.web.url import DEFAULT_TOKEN_PARAM, share_url

logger = logging.getLogger(__name__)


class MosaicSession:
    """Owns the configuration and canvas for a single page view."""

    def __init__(self, config: GridConfig, canvas: BaseCanvas) -> None:
        if not config.is_valid:
            raise ValueError("MosaicSession requires a valid grid configuration.")
        self._config = config
        self._canvas = canvas

    @property
    def config(self) -> GridConfig:
        return self._config

    @property
    def canvas(self) -> BaseCanvas:
        return self._canvas

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def generate(self) -> None:
        """Apply the palette and draw the whole grid."""
        self._canvas.apply_palette(palette_for(self._config))
        self._canvas.draw(self._config.states)

    # ------------------------------------------------------------------
    # Cell mutations
    # ------------------------------------------------------------------

    def _check_cell(self, row: int, col: int) -> None:
        count = self._config.count
        if not (0 <= row < count and 0 <= col < count):
            raise IndexError(f"Cell ({row}, {col}) is outside a {count}x{count} grid")

    def set_state(self, row: int, col: int, value: bool) -> None:
        self._check_cell(row, col)
        self._config.states[row, col] = bool(value)
        self._canvas.update_cell(row, col, bool(value))

    def toggle(self, row: int, col: int) -> bool:
        """Flip one cell and return its new state."""
        self._check_cell(row, col)
        value = not bool(self._config.states[row, col])
        self.set_state(row, col, value)
        return value

    def _apply(self, target: np.ndarray) -> None:
        for row, col in np.argwhere(self._config.states != target):
            self.set_state(int(row), int(col), bool(target[row, col]))

    def invert_all(self) -> None:
        self._apply(~self._config.states)

    def use_default(self) -> None:
        """Restore the checkerboard without touching colours or size."""
        self._apply(default_states(self._config.count))

    def all_foreground(self) -> None:
        self._apply(np.ones_like(self._config.states))

    def all_background(self) -> None:
        self._apply(np.zeros_like(self._config.states))

    # ------------------------------------------------------------------
    # Sharing
    # ------------------------------------------------------------------

    def share(self, base_url: str, token_param: str = DEFAULT_TOKEN_PARAM) -> str:
        """Return a link that reopens the current mosaic."""
        url = share_url(self._config, base_url, token_param)
        logger.debug("Share link: %s", url)
        return url

"""Tests for the Rich terminal canvas."""

from __future__ import annotations

import pytest
from rich.console import Console

from mosaic.codec.grid_config import GridConfig, decode_token, default_states
from mosaic.interfaces.canvas import palette_for
from mosaic.interfaces.terminal_ui import TerminalCanvas
from mosaic.web.session import MosaicSession


class TestTerminalCanvas:
    def test_render_grid(self, terminal_canvas: TerminalCanvas) -> None:
        terminal_canvas.apply_palette(palette_for(GridConfig(count=3)))
        terminal_canvas.draw(default_states(3))
        assert terminal_canvas.render_grid().plain == ".#.\n#.#\n.#."

    def test_update_cell(self, terminal_canvas: TerminalCanvas) -> None:
        terminal_canvas.apply_palette(palette_for(GridConfig(count=3)))
        terminal_canvas.draw(default_states(3))
        terminal_canvas.update_cell(0, 0, True)
        assert terminal_canvas.render_grid().plain.splitlines()[0] == "##."

    def test_update_before_draw(self, terminal_canvas: TerminalCanvas) -> None:
        with pytest.raises(RuntimeError):
            terminal_canvas.update_cell(0, 0, True)

    def test_render_before_palette(self, terminal_canvas: TerminalCanvas) -> None:
        with pytest.raises(RuntimeError):
            terminal_canvas.render_grid()

    def test_draw_prints(self, terminal_canvas: TerminalCanvas, console: Console) -> None:
        session = MosaicSession(decode_token("3!14!0000!____!40"), terminal_canvas)
        session.generate()
        assert "#.." in console.export_text()

    def test_session_toggle_reaches_canvas(self, terminal_canvas: TerminalCanvas) -> None:
        session = MosaicSession(GridConfig(count=2), terminal_canvas)
        session.generate()
        session.all_foreground()
        assert terminal_canvas.render_grid().plain == "##\n##"


class TestPanels:
    def test_show_config(self, terminal_canvas: TerminalCanvas, console: Console) -> None:
        terminal_canvas.show_config(GridConfig(count=4))
        text = console.export_text()
        assert "count" in text
        assert "4x4" in text
        assert "yes" in text

    def test_show_config_invalid(self, terminal_canvas: TerminalCanvas, console: Console) -> None:
        terminal_canvas.show_config(decode_token("zz"))
        text = console.export_text()
        assert "invalid" in text
        assert "no" in text

    def test_show_error(self, terminal_canvas: TerminalCanvas, console: Console) -> None:
        terminal_canvas.show_error("Invalid configuration!")
        assert "Invalid configuration!" in console.export_text()

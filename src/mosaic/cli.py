"""Mosaic CLI — Typer-based entry point.

Commands
--------
encode      Build a configuration from named fields and print its token.
decode      Decode a token, report its fields and validity.
share       Print the share link for a token.
open        Resolve a page URL: render it, report a redirect, or show the error.
"""

from __future__ import annotations

import logging
from typing import Optional

import typer  # type: ignore[import-untyped]

from mosaic.codec.grid_config import (
    PARAM_BACK_COLOR,
    PARAM_COUNT,
    PARAM_FORE_COLOR,
    PARAM_INVERSE,
    PARAM_SIZE,
    PARAM_STATES,
    GridConfig,
    parse_params,
    parse_token,
)
from mosaic.config.settings import get_settings
from mosaic.interfaces.terminal_ui import TerminalCanvas
from mosaic.web.session import MosaicSession
from mosaic.web.url import params_url, resolve_page, share_url

app = typer.Typer(
    name="mosaic",
    help="Mosaic Grids — shareable grid toggle toy",
    add_completion=False,
)


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s",
    )


def _rows_to_states(rows: str) -> list[list[bool]]:
    """``"010,101,010"`` → nested booleans."""
    matrix: list[list[bool]] = []
    for row in rows.split(","):
        row = row.strip()
        if not row or set(row) - {"0", "1"}:
            raise typer.BadParameter(f"Row {row!r} must be a non-empty string of 0 and 1.")
        matrix.append([ch == "1" for ch in row])
    return matrix


def _render(config: GridConfig, canvas: TerminalCanvas) -> None:
    session = MosaicSession(config, canvas)
    session.generate()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def encode(
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Grid side length (1-64)."),
    size: Optional[int] = typer.Option(None, "--size", "-s", help="Cell edge in pixels (15-150)."),
    fore_color: Optional[str] = typer.Option(None, "--fore-color", help="Foreground colour, #rrggbb."),
    back_color: Optional[str] = typer.Option(None, "--back-color", help="Background colour, #rrggbb."),
    inverse: bool = typer.Option(False, "--inverse", help="Swap the on/off colours."),
    states: Optional[str] = typer.Option(None, "--states", help="Radix-64 states string."),
    rows: Optional[str] = typer.Option(None, "--rows", help="Comma-separated rows of 0/1, e.g. 010,101,010."),
    params: bool = typer.Option(False, "--params", help="Print named parameters instead of a token."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Build a configuration and print its compact token."""
    _setup_logging(verbose)

    fields: dict[str, str] = {}
    if count is not None:
        fields[PARAM_COUNT] = str(count)
    if size is not None:
        fields[PARAM_SIZE] = str(size)
    if fore_color:
        fields[PARAM_FORE_COLOR] = fore_color
    if back_color:
        fields[PARAM_BACK_COLOR] = back_color
    if inverse:
        fields[PARAM_INVERSE] = ""
    if states:
        fields[PARAM_STATES] = states

    config = parse_params(fields).config
    if rows:
        matrix = _rows_to_states(rows)
        config = GridConfig(
            count=count if count is not None else len(matrix),
            size=config.size,
            fore_color=config.fore_color,
            back_color=config.back_color,
            inverse=config.inverse,
            states=matrix,
        )

    if not config.is_valid:
        typer.echo("Invalid configuration.", err=True)
        raise typer.Exit(1)

    if params:
        typer.echo(params_url(config, get_settings().base_url))
    else:
        typer.echo(config.to_token())


@app.command()
def decode(
    token: str = typer.Argument(..., help="Compact configuration token."),
    show: bool = typer.Option(False, "--show", help="Render the grid."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Decode a token and report its fields."""
    _setup_logging(verbose)

    result = parse_token(token)
    canvas = TerminalCanvas()
    canvas.show_config(result.config)
    if result.error:
        canvas.show_error(f"Could not parse token: {result.error}")
    if not result.config.is_valid:
        raise typer.Exit(1)
    if show:
        _render(result.config, canvas)


@app.command()
def share(
    token: str = typer.Argument(..., help="Compact configuration token."),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Bare page URL (defaults to settings)."),
) -> None:
    """Print the share link for a token."""
    _setup_logging()
    settings = get_settings()

    config = parse_token(token).config
    if not config.is_valid:
        typer.echo("Invalid configuration.", err=True)
        raise typer.Exit(1)
    typer.echo(share_url(config, base_url or settings.base_url, settings.token_param))


@app.command("open")
def open_url(
    url: str = typer.Argument(..., help="Page URL, with or without parameters."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Resolve a page URL the way the page itself would."""
    _setup_logging(verbose)

    page = resolve_page(url, get_settings().token_param)
    canvas = TerminalCanvas()
    if page.action == "redirect":
        typer.echo(f"Redirect: {page.redirect_url}")
        return
    if page.action == "error":
        canvas.show_error(page.message)
        raise typer.Exit(1)
    _render(page.config, canvas)


def main() -> int:
    """Entry point for the ``mosaic`` console script."""
    app()
    return 0

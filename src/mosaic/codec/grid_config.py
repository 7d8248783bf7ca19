"""Grid configuration model and its two serialized forms.

A :class:`GridConfig` describes one mosaic: the grid side length, the
pixel size of a cell, the two colours, the *inverse* flag and the square
boolean ``states`` matrix.  It can be read from and written to:

* the **compact token** — ``count!size!fore!back![~]states`` with hex
  integers and radix-64 colour/state fields, meant for a single URL query
  value;
* the **named-parameter map** — ``count``, ``size``, ``fore-color``,
  ``back-color``, ``inverse`` and ``states`` as individual query keys, with
  decimal integers so the values stay human-editable.

Parsing never raises.  A field that cannot be parsed turns ``states`` into
the empty *sentinel* matrix and leaves every field decoded before it in
place; :attr:`GridConfig.is_valid` is the single place that rejects input.
"""

from __future__ import annotations

import logging
import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

from mosaic.codec.radix64 import (
    alphabet_to_bin,
    alphabet_to_hex,
    bin_to_alphabet,
    hex_to_alphabet,
    is_valid_symbol_string,
    pad_zero,
)

logger = logging.getLogger(__name__)

Grid = np.ndarray  # 2D array of bools, True = foreground ("on")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_COUNT = 9
DEFAULT_SIZE = 50
DEFAULT_FORE_COLOR = "#000000"
DEFAULT_BACK_COLOR = "#ffffff"
DEFAULT_INVERSE = False

MIN_COUNT = 1
MAX_COUNT = 64
MIN_SIZE = 15
MAX_SIZE = 150

FIELD_DELIMITER = "!"
INVERSE_MARKER = "~"
TOKEN_FIELDS = 5
COLOR_HEX_DIGITS = 6

# Named-parameter keys
PARAM_COUNT = "count"
PARAM_SIZE = "size"
PARAM_FORE_COLOR = "fore-color"
PARAM_BACK_COLOR = "back-color"
PARAM_INVERSE = "inverse"
PARAM_STATES = "states"

_COLOR_RE = re.compile(r"#[0-9a-f]{6}")
_HEX_INT_RE = re.compile(r"[0-9a-fA-F]+")
_DEC_INT_RE = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# States matrix
# ---------------------------------------------------------------------------


def invalid_states() -> Grid:
    """The empty sentinel matrix produced by a failed parse."""
    return np.zeros((0, 0), dtype=bool)


def default_states(count: int = DEFAULT_COUNT) -> Grid:
    """Checkerboard with cell (0, 0) off: ``states[i, j] = (i + j) % 2 != 0``."""
    if count < 1:
        return invalid_states()
    idx = np.arange(count)
    return np.add.outer(idx, idx) % 2 != 0


def as_states(value: Any) -> Grid:
    """Copy *value* into a square 2-D array.

    Anything that is not a square matrix (ragged rows, a flat list, a
    rectangle) becomes the sentinel.  Cell types are left alone so that
    :func:`is_valid` can reject non-boolean cells.
    """
    try:
        grid = np.array(value)
    except ValueError:
        return invalid_states()
    if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
        return invalid_states()
    return grid


def states_to_string(states: Grid) -> str:
    """Row-major ``1``/``0`` bits of *states*, radix-64 encoded."""
    bits = "".join("1" if cell else "0" for cell in states.ravel())
    return bin_to_alphabet(bits)


def states_from_string(s: str | None, count: int | None = None) -> Grid | None:
    """Decode a radix-64 states field for a ``count × count`` grid.

    Returns ``None`` when *s* is missing or empty (the caller substitutes
    the default checkerboard) and the sentinel when *s* is malformed.
    """
    if not s:
        return None
    if not is_valid_symbol_string(s):
        logger.debug("States field has non-alphabet characters: %r", s)
        return invalid_states()
    if count is None:
        count = DEFAULT_COUNT
    if count < 1:
        return invalid_states()

    n_cells = count * count
    bits = alphabet_to_bin(s, n_cells)
    # Front padding to a multiple of count adds at most count - 1 zeros.
    if len(bits) <= n_cells - count:
        logger.debug(
            "States field holds %d bits, a %dx%d grid needs %d.",
            len(bits), count, count, n_cells,
        )
        return invalid_states()
    bits = pad_zero(bits, count)

    cells = np.frombuffer(bits.encode("ascii"), dtype=np.uint8) == ord("1")
    return cells.reshape(count, count)


def is_sentinel(states: Grid) -> bool:
    return isinstance(states, np.ndarray) and states.size == 0


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class GridConfig:
    """One mosaic configuration.

    Construction never fails.  Omitted ``states`` become the default
    checkerboard for ``count``; a non-square ``states`` becomes the
    sentinel.  Use :attr:`is_valid` before rendering.
    """

    count: int = DEFAULT_COUNT
    size: int = DEFAULT_SIZE
    fore_color: str = DEFAULT_FORE_COLOR
    back_color: str = DEFAULT_BACK_COLOR
    inverse: bool = DEFAULT_INVERSE
    states: Grid | None = None

    def __post_init__(self) -> None:
        if self.states is None:
            self.states = (
                default_states(self.count)
                if _in_range(self.count, MIN_COUNT, MAX_COUNT)
                else invalid_states()
            )
        else:
            self.states = as_states(self.states)

    @classmethod
    def from_fields(cls, **fields: Any) -> GridConfig:
        """Build a config, treating ``None`` values as "use the default"."""
        return cls(**{k: v for k, v in fields.items() if v is not None})

    @classmethod
    def from_token(cls, token: str) -> GridConfig:
        return parse_token(token).config

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> GridConfig:
        return parse_params(params).config

    def to_token(self) -> str:
        return encode_token(self)

    @property
    def is_valid(self) -> bool:
        return is_valid(self)

    @property
    def is_default(self) -> bool:
        return is_default(self)

    @property
    def has_default_states(self) -> bool:
        """True if ``states`` is the checkerboard for the current ``count``."""
        return (
            _is_int(self.count)
            and self.states.shape == (self.count, self.count)
            and np.array_equal(self.states, default_states(self.count))
        )

    def copy(self) -> GridConfig:
        return GridConfig(
            count=self.count,
            size=self.size,
            fore_color=self.fore_color,
            back_color=self.back_color,
            inverse=self.inverse,
            states=self.states.copy(),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridConfig):
            return NotImplemented
        return (
            self.count == other.count
            and self.size == other.size
            and self.fore_color == other.fore_color
            and self.back_color == other.back_color
            and self.inverse == other.inverse
            and np.array_equal(self.states, other.states)
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass
class ParseResult:
    """Outcome of decoding a token or parameter map.

    ``config`` is always present.  When ``error`` is set, ``config.states``
    is the sentinel and the fields decoded before the failure are kept.
    """

    config: GridConfig
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


def _in_range(value: Any, low: int, high: int) -> bool:
    return _is_int(value) and low <= value <= high


def _is_color(value: Any) -> bool:
    return isinstance(value, str) and _COLOR_RE.fullmatch(value) is not None


def is_valid(config: GridConfig) -> bool:
    """Check every field of *config* against its allowed range."""
    states = config.states
    return (
        _in_range(config.count, MIN_COUNT, MAX_COUNT)
        and _in_range(config.size, MIN_SIZE, MAX_SIZE)
        and _is_color(config.fore_color)
        and _is_color(config.back_color)
        and isinstance(config.inverse, (bool, np.bool_))
        and isinstance(states, np.ndarray)
        and states.dtype == np.bool_
        and states.shape == (config.count, config.count)
    )


def is_default(config: GridConfig) -> bool:
    """True if *config* equals the built-in default in every field."""
    return (
        config.count == DEFAULT_COUNT
        and config.size == DEFAULT_SIZE
        and config.fore_color == DEFAULT_FORE_COLOR
        and config.back_color == DEFAULT_BACK_COLOR
        and config.inverse == DEFAULT_INVERSE
        and isinstance(config.states, np.ndarray)
        and config.states.dtype == np.bool_
        and np.array_equal(config.states, default_states(DEFAULT_COUNT))
    )


# ---------------------------------------------------------------------------
# Compact token
# ---------------------------------------------------------------------------


def encode_token(config: GridConfig) -> str:
    """Serialize *config* into the compact ``!``-delimited token.

    The states field is left empty when it equals the default checkerboard
    for ``count``, and a trailing empty field is dropped.  The result is not
    URL-escaped.

    Raises
    ------
    ValueError
        If *config* is not valid.
    """
    if not config.is_valid:
        raise ValueError("Cannot encode an invalid grid configuration.")

    states_field = "" if config.has_default_states else states_to_string(config.states)
    token = FIELD_DELIMITER.join([
        format(config.count, "x"),
        format(config.size, "x"),
        hex_to_alphabet(config.fore_color[1:]),
        hex_to_alphabet(config.back_color[1:]),
        (INVERSE_MARKER if config.inverse else "") + states_field,
    ])
    if token.endswith(FIELD_DELIMITER):
        token = token[:-1]
    return token


def _parse_int(text: str, base: int) -> int:
    pattern = _HEX_INT_RE if base == 16 else _DEC_INT_RE
    if not pattern.fullmatch(text):
        raise ValueError(f"Not a base-{base} integer: {text!r}")
    return int(text, base)


def _decode_color(text: str) -> str:
    if not text:
        raise ValueError("Empty colour field")
    digits = alphabet_to_hex(text)
    if len(digits) > COLOR_HEX_DIGITS:
        raise ValueError(f"Colour field {text!r} holds more than {COLOR_HEX_DIGITS} hex digits")
    # Short fields are zero-extended.
    return "#" + digits.rjust(COLOR_HEX_DIGITS, "0")


def _token_field(parts: list[str], index: int, name: str) -> str:
    if index >= len(parts):
        raise ValueError(f"Token is missing the {name} field")
    return parts[index]


def parse_token(token: str) -> ParseResult:
    """Decode a compact token.

    Fields decoded before a failure are retained; the failure itself is
    reported through ``ParseResult.error`` and the sentinel states.
    """
    fields: dict[str, Any] = {}
    try:
        parts = token.split(FIELD_DELIMITER)
        if len(parts) > TOKEN_FIELDS:
            raise ValueError(f"Token has {len(parts)} fields, at most {TOKEN_FIELDS} allowed")
        fields["count"] = _parse_int(_token_field(parts, 0, "count"), 16)
        fields["size"] = _parse_int(_token_field(parts, 1, "size"), 16)
        fields["fore_color"] = _decode_color(_token_field(parts, 2, "fore colour"))
        fields["back_color"] = _decode_color(_token_field(parts, 3, "back colour"))

        if len(parts) == TOKEN_FIELDS:
            tail = parts[4]
            fields["inverse"] = tail.startswith(INVERSE_MARKER)
            if fields["inverse"]:
                tail = tail[len(INVERSE_MARKER):]
            fields["states"] = states_from_string(tail, fields["count"])
    except ValueError as exc:
        logger.debug("Could not parse token %r: %s", token, exc)
        fields["states"] = invalid_states()
        return ParseResult(config=GridConfig.from_fields(**fields), error=str(exc))

    config = GridConfig.from_fields(**fields)
    if is_sentinel(config.states):
        return ParseResult(config=config, error="Malformed states field")
    return ParseResult(config=config)


def decode_token(token: str) -> GridConfig:
    return parse_token(token).config


# ---------------------------------------------------------------------------
# Named-parameter map
# ---------------------------------------------------------------------------


def _param(params: Mapping[str, str], key: str) -> str | None:
    value = params.get(key)
    return value if value else None


def parse_params(params: Mapping[str, str]) -> ParseResult:
    """Decode the human-editable named-parameter form.

    ``count`` and ``size`` are decimal here, unlike the hex token fields.
    Colours are lowercased; ``inverse`` is on when the key is present,
    whatever its value.  Empty values count as absent.
    """
    fields: dict[str, Any] = {"inverse": PARAM_INVERSE in params}
    try:
        count = _param(params, PARAM_COUNT)
        if count is not None:
            fields["count"] = _parse_int(count.strip(), 10)
        size = _param(params, PARAM_SIZE)
        if size is not None:
            fields["size"] = _parse_int(size.strip(), 10)
    except ValueError as exc:
        logger.debug("Could not parse parameters %r: %s", dict(params), exc)
        fields["states"] = invalid_states()
        return ParseResult(config=GridConfig.from_fields(**fields), error=str(exc))

    fore = _param(params, PARAM_FORE_COLOR)
    back = _param(params, PARAM_BACK_COLOR)
    fields["fore_color"] = fore.lower() if fore else None
    fields["back_color"] = back.lower() if back else None
    fields["states"] = states_from_string(_param(params, PARAM_STATES), fields.get("count"))

    config = GridConfig.from_fields(**fields)
    if is_sentinel(config.states):
        return ParseResult(config=config, error="Malformed states field")
    return ParseResult(config=config)


def decode_params(params: Mapping[str, str]) -> GridConfig:
    return parse_params(params).config


def encode_params(config: GridConfig) -> dict[str, str]:
    """Inverse of :func:`parse_params` for a valid configuration.

    ``inverse`` is emitted only when set and ``states`` only when it differs
    from the default checkerboard.
    """
    if not config.is_valid:
        raise ValueError("Cannot encode an invalid grid configuration.")

    params = {
        PARAM_COUNT: str(config.count),
        PARAM_SIZE: str(config.size),
        PARAM_FORE_COLOR: config.fore_color,
        PARAM_BACK_COLOR: config.back_color,
    }
    if config.inverse:
        params[PARAM_INVERSE] = ""
    if not config.has_default_states:
        params[PARAM_STATES] = states_to_string(config.states)
    return params

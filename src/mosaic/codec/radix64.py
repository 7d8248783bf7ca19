"""Radix-64 bit codec.

Converts the same bit sequence between three textual forms: a string of
binary digits, a string of hexadecimal digits, and a string over a
64-symbol URL-safe alphabet.  Each alphabet symbol carries six bits; each
hex digit carries four.

Padding is always added at the *front* of a bit string, so decoding with a
target length (which keeps the trailing bits) drops exactly the padding
that encoding introduced.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# Symbol value 0..63, in this exact order.
ALPHABET = (
    "0123456789"
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "-_"
)

_SYMBOL_VALUES: dict[str, int] = {ch: i for i, ch in enumerate(ALPHABET)}

_INVALID_SYMBOL_RE = re.compile(r"[^0-9a-zA-Z\-_]")
_BIN_RE = re.compile(r"[01]*")
_HEX_RE = re.compile(r"[0-9a-fA-F]*")

BITS_PER_SYMBOL = 6
BITS_PER_HEX = 4


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def pad_zero(bits: str, n: int) -> str:
    """Left-pad *bits* with ``0`` until its length is a multiple of *n*."""
    missing = (n - len(bits) % n) % n
    return "0" * missing + bits


def _chunks(s: str, n: int) -> list[str]:
    return [s[i: i + n] for i in range(0, len(s), n)]


def _keep_last(s: str, target_len: int | None) -> str:
    if target_len is not None and target_len < len(s):
        return s[len(s) - target_len:]
    return s


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def is_valid_symbol_string(s: str) -> bool:
    """True iff every character of *s* is an alphabet symbol."""
    return _INVALID_SYMBOL_RE.search(s) is None


def bin_to_alphabet(bits: str) -> str:
    """Encode a binary-digit string as alphabet symbols.

    The input is front-padded to a multiple of six, so ``"1"`` and
    ``"000001"`` both become ``"1"``.
    """
    if not _BIN_RE.fullmatch(bits):
        raise ValueError(f"Not a binary digit string: {bits!r}")
    padded = pad_zero(bits, BITS_PER_SYMBOL)
    return "".join(ALPHABET[int(group, 2)] for group in _chunks(padded, BITS_PER_SYMBOL))


def alphabet_to_bin(s: str, target_len: int | None = None) -> str:
    """Decode alphabet symbols into a binary-digit string.

    Every symbol yields six bits.  When *target_len* is smaller than the
    result, only the last *target_len* bits are returned.

    Raises
    ------
    ValueError
        If *s* contains a character outside the alphabet.
    """
    groups: list[str] = []
    for ch in s:
        value = _SYMBOL_VALUES.get(ch)
        if value is None:
            raise ValueError(f"Invalid radix-64 symbol: {ch!r}")
        groups.append(format(value, f"0{BITS_PER_SYMBOL}b"))
    return _keep_last("".join(groups), target_len)


def hex_to_alphabet(s: str) -> str:
    """Encode a hexadecimal-digit string as alphabet symbols."""
    if not _HEX_RE.fullmatch(s):
        raise ValueError(f"Not a hexadecimal digit string: {s!r}")
    bits = "".join(format(int(digit, 16), f"0{BITS_PER_HEX}b") for digit in s)
    return bin_to_alphabet(bits)


def alphabet_to_hex(s: str, target_len: int | None = None) -> str:
    """Decode alphabet symbols into a lowercase hexadecimal-digit string."""
    bits = pad_zero(alphabet_to_bin(s), BITS_PER_HEX)
    digits = "".join(format(int(group, 2), "x") for group in _chunks(bits, BITS_PER_HEX))
    return _keep_last(digits, target_len)

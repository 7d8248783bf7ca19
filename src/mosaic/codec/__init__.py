"""Mosaic configuration codecs.

Provides the radix-64 bit codec and the grid configuration model with its
compact-token and named-parameter serializations.
"""

from __future__ import annotations

"""Rounding used by all game math.

Python's built-in ``round`` rounds halves to even (``round(2.5) == 2``).
Battle formulas are balanced around halves rounding up, so every
formula goes through :func:`round_half_up` instead.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with ``x.5`` rounding towards +inf."""
    return math.floor(value + 0.5)

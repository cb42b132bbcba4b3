"""Normalization helpers.

Centralizes defensive parsing of remote scalar values.
"""

from __future__ import annotations

import math
from typing import Any


def counter_or_zero(value: Any) -> int:
    """Read a remote counter, treating absent, falsy or unreadable values as ``0``.

    Counters are whole numbers; a fractional value is truncated toward zero
    (``2.9`` and ``"2.9"`` both read as ``2``).
    """
    if not value:
        return 0
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(parsed) or math.isinf(parsed):
        return 0
    return int(parsed)


def text_or_none(value: Any) -> str | None:
    """Read a remote text field; falsy values become ``None``."""
    if not value:
        return None
    return str(value)

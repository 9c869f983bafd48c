"""Validation and parsing of numeric text typed into the controls.

Only plain decimals are accepted (``12``, ``-3.5``, ``2.``, ``.25``).
Exponents, ``inf``/``nan`` and digit separators are rejected even though
``float()`` would take them.
"""

import math
import re

from geometry import InvalidInputError, validate_point_count

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def is_acceptable_edit(text: str) -> bool:
    """Whether an in-progress edit may stand. Empty text is allowed."""
    if text == "":
        return True
    return _DECIMAL_RE.fullmatch(text) is not None


def parse_decimal(text: str) -> float:
    """Parse a complete decimal, raising InvalidInputError otherwise."""
    stripped = text.strip()
    if not stripped or _DECIMAL_RE.fullmatch(stripped) is None:
        raise InvalidInputError(f"Not a decimal number: {text!r}")
    value = float(stripped)
    if not math.isfinite(value):
        raise InvalidInputError(f"Number out of range: {text!r}")
    return value


def parse_point_count(text: str) -> int:
    """Parse a point count; fractional values are truncated toward zero."""
    return validate_point_count(parse_decimal(text))

"""Best-effort numeric extraction from raw scalar values."""
from __future__ import annotations

import math
import re
from typing import Any, Optional

__all__ = [
    "AGE_MAX",
    "AGE_MIN",
    "extract_age",
    "extract_decimal",
    "extract_integer",
    "scalar_text",
]

AGE_MIN = 0
AGE_MAX = 150

_NON_DIGITS = re.compile(r"[^0-9]")
_NON_DECIMAL = re.compile(r"[^0-9.]")


def scalar_text(value: Any) -> Optional[str]:
    """Render a JSON scalar the way it reads in the source document.

    Integral floats lose their trailing ``.0`` so ``30.0`` reads as ``30``;
    booleans render as ``true``/``false``.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        if value.is_integer():
            return str(int(value))
    return str(value)


def extract_integer(value: Any) -> Optional[int]:
    """Concatenate every digit in ``value`` and parse the result."""

    text = scalar_text(value)
    if text is None:
        return None
    digits = _NON_DIGITS.sub("", text)
    if not digits:
        return None
    try:
        return int(digits)
    except ValueError:
        return None


def extract_age(value: Any) -> Optional[int]:
    """Return the integer in ``value`` when it is a plausible age (0–150)."""

    number = extract_integer(value)
    if number is None or not AGE_MIN <= number <= AGE_MAX:
        return None
    return number


def extract_decimal(value: Any) -> Optional[float]:
    """Strip everything but digits and dots and parse a decimal."""

    text = scalar_text(value)
    if text is None:
        return None
    cleaned = _NON_DECIMAL.sub("", text)
    if not cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return number if math.isfinite(number) else None

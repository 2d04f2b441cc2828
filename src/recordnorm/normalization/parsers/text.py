"""Extract canonical values embedded in free-form text."""
from __future__ import annotations

import re
from typing import Optional

from .numbers import AGE_MAX, AGE_MIN, extract_age, extract_decimal

__all__ = [
    "EMAIL_PATTERN",
    "extract_age_from_text",
    "extract_email",
    "extract_salary_from_text",
    "looks_like_name",
]

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

_AGE_PATTERN = re.compile(r"\b(\d{1,3})\s*(?:years?|años?|ans?|jahre?)\b", re.IGNORECASE)
_CURRENCY_PATTERN = re.compile(r"(?:\$|€|£|\bUSD|\bEUR)\s*(\d{1,8}(?:[.,]\d{2})?)\b", re.IGNORECASE)
_NAME_CHARS = re.compile(r"^[a-zA-ZÀ-ÿ\s'.-]+$")


def extract_email(text: Optional[str]) -> Optional[str]:
    """Return the first e-mail address found in ``text``."""

    if not text:
        return None
    match = EMAIL_PATTERN.search(text)
    return match.group(0) if match else None


def extract_age_from_text(text: Optional[str]) -> Optional[int]:
    """Find ``<n> years``/``años``/``ans``/``Jahre``; fall back to any digits."""

    if not text:
        return None
    match = _AGE_PATTERN.search(text)
    if match:
        age = int(match.group(1))
        return age if AGE_MIN <= age <= AGE_MAX else None
    return extract_age(text)


def extract_salary_from_text(text: Optional[str]) -> Optional[float]:
    """Find a currency-prefixed amount; fall back to any decimal in ``text``."""

    if not text:
        return None
    match = _CURRENCY_PATTERN.search(text)
    if match:
        return float(match.group(1).replace(",", "."))
    return extract_decimal(text)


def looks_like_name(value: Optional[str]) -> bool:
    """Letters, spaces, dots, apostrophes and hyphens only; 2–50 chars; no digits."""

    if value is None:
        return False
    trimmed = value.strip()
    if not 2 <= len(trimmed) <= 50:
        return False
    if any(ch.isdigit() for ch in trimmed):
        return False
    return _NAME_CHARS.match(trimmed) is not None

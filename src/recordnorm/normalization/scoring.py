"""Completeness and concordance scores for canonical records."""
from __future__ import annotations

import re
from enum import Enum

from .records import VALUE_FIELDS, CanonicalRecord

__all__ = [
    "QualityTier",
    "TIER_ORDER",
    "completeness",
    "concordance",
    "quality_tier",
]

_NAME_SHAPE = re.compile(r"^[A-Za-zÀ-ÿ\s]{2,30}$")
_EMAIL_SHAPE = re.compile(r"^[^@]+@[^@]+\.[^@]+$")

SALARY_CEILING = 1_000_000


class QualityTier(str, Enum):
    COMPLETE = "COMPLETE"
    PARTIAL = "PARTIAL"
    MINIMAL = "MINIMAL"
    EMPTY = "EMPTY"


TIER_ORDER = (QualityTier.COMPLETE, QualityTier.PARTIAL, QualityTier.MINIMAL, QualityTier.EMPTY)


def quality_tier(record: CanonicalRecord) -> QualityTier:
    filled = len(record.filled_fields())
    if filled >= 5:
        return QualityTier.COMPLETE
    if filled >= 3:
        return QualityTier.PARTIAL
    if filled >= 1:
        return QualityTier.MINIMAL
    return QualityTier.EMPTY


def completeness(record: CanonicalRecord) -> int:
    """Share of populated non-id fields, 0–100, rounded down."""

    return len(record.filled_fields()) * 100 // len(VALUE_FIELDS)


def concordance(record: CanonicalRecord) -> int:
    """Weighted shape checks: names 20+20, email 25, age 15, department 10, salary 10."""

    score = 0
    if record.first_name and _NAME_SHAPE.match(record.first_name):
        score += 20
    if record.last_name and _NAME_SHAPE.match(record.last_name):
        score += 20
    if record.email and _EMAIL_SHAPE.match(record.email):
        score += 25
    if record.age is not None and 16 <= record.age <= 80:
        score += 15
    if record.department and len(record.department.strip()) > 2:
        score += 10
    if record.salary is not None and 0 < record.salary <= SALARY_CEILING:
        score += 10
    return score

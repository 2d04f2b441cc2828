"""Post-mapping cleaning rules for canonical records."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .categories import Category
from .parsers.numbers import AGE_MAX, AGE_MIN
from .records import CanonicalRecord

__all__ = [
    "NAME_MAX_LENGTH",
    "ValidationIssue",
    "ValidationResult",
    "clean_record",
    "prepare_for_csv",
    "validate_record",
]

LOGGER = logging.getLogger(__name__)

NAME_MAX_LENGTH = 50

_STRICT_EMAIL = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_LINE_BREAKS = re.compile(r"[\r\n]+")
_TEXT_FIELDS = ("first_name", "last_name", "email", "department")


@dataclass(frozen=True)
class ValidationIssue:
    record_id: int
    code: str
    message: str
    severity: str = "warning"


@dataclass
class ValidationResult:
    record: CanonicalRecord
    warnings: List[ValidationIssue] = field(default_factory=list)


def _trimmed(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_record(record: CanonicalRecord, *, category: Optional[Category] = None) -> ValidationResult:
    """Clean a copy of ``record`` and collect the data-quality deviations.

    Names are trimmed and capped at :data:`NAME_MAX_LENGTH`, the e-mail is
    lower-cased (kept even when malformed), ages outside 0–150 are dropped and
    negative salaries clamp to zero. Publication records keep their ``age``
    slot untouched because it carries the publication year.
    """

    cleaned = record.model_copy()
    warnings: List[ValidationIssue] = []

    def _issue(code: str, message: str) -> None:
        warnings.append(ValidationIssue(record_id=cleaned.id, code=code, message=message))
        LOGGER.warning(f"record.{code}", extra={"record_id": cleaned.id, "detail": message})

    for name in ("first_name", "last_name"):
        value = _trimmed(getattr(cleaned, name))
        if value is not None and len(value) > NAME_MAX_LENGTH:
            value = value[:NAME_MAX_LENGTH]
            LOGGER.debug("record.truncated", extra={"record_id": cleaned.id, "field": name})
        setattr(cleaned, name, value)

    cleaned.department = _trimmed(cleaned.department)

    email = _trimmed(cleaned.email)
    if email is not None:
        email = email.lower()
        if not _STRICT_EMAIL.match(email):
            _issue("email_invalid", f"email '{email}' does not look like an address")
    cleaned.email = email

    if cleaned.age is not None and category != Category.PUBLICATION:
        if not AGE_MIN <= cleaned.age <= AGE_MAX:
            _issue("age_out_of_range", f"age {cleaned.age} outside {AGE_MIN}-{AGE_MAX}")
            cleaned.age = None

    if cleaned.salary is not None and cleaned.salary < 0:
        _issue("salary_negative", f"salary {cleaned.salary} clamped to 0")
        cleaned.salary = 0.0

    return ValidationResult(record=cleaned, warnings=warnings)


def clean_record(record: CanonicalRecord, *, category: Optional[Category] = None) -> CanonicalRecord:
    return validate_record(record, category=category).record


def _sanitize(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return _LINE_BREAKS.sub(" ", value.strip())


def prepare_for_csv(records: Optional[Iterable[CanonicalRecord]]) -> List[CanonicalRecord]:
    """Copies of ``records`` with trimmed, single-line text fields."""

    if not records:
        return []
    prepared: List[CanonicalRecord] = []
    for record in records:
        update = {name: _sanitize(getattr(record, name)) for name in _TEXT_FIELDS}
        prepared.append(record.model_copy(update=update))
    return prepared

"""Value extractors turning raw scalars and free text into typed values."""

from .numbers import AGE_MAX, AGE_MIN, extract_age, extract_decimal, extract_integer, scalar_text
from .text import (
    EMAIL_PATTERN,
    extract_age_from_text,
    extract_email,
    extract_salary_from_text,
    looks_like_name,
)

__all__ = [
    "AGE_MAX",
    "AGE_MIN",
    "EMAIL_PATTERN",
    "extract_age",
    "extract_age_from_text",
    "extract_decimal",
    "extract_email",
    "extract_integer",
    "extract_salary_from_text",
    "looks_like_name",
    "scalar_text",
]

"""Semantic normalization engine.

Raw records (mappings, bare strings, arbitrary objects) are classified into a
:class:`Category`, mapped onto the seven-field :class:`CanonicalRecord`,
cleaned, scored and ordered. :func:`process` runs the whole chain.
"""

from .categories import Category, category_match_ratio, classify
from .mapper import RecordMapper, map_record, project_publication
from .ordering import ClassifiedRecord, post_sort, pre_sort, raw_completeness
from .parsers.numbers import extract_age, extract_decimal, extract_integer
from .parsers.text import extract_age_from_text, extract_email, extract_salary_from_text, looks_like_name
from .pipeline import (
    EmptyInputError,
    NormalizationPipeline,
    NormalizationResult,
    dataset_statistics,
    process,
    transformation_statistics,
)
from .records import CSV_HEADER, CanonicalRecord, merge_fill_if_absent
from .scoring import QualityTier, completeness, concordance, quality_tier
from .validators import ValidationIssue, ValidationResult, clean_record, prepare_for_csv, validate_record

__all__ = [
    "CSV_HEADER",
    "CanonicalRecord",
    "Category",
    "ClassifiedRecord",
    "EmptyInputError",
    "NormalizationPipeline",
    "NormalizationResult",
    "QualityTier",
    "RecordMapper",
    "ValidationIssue",
    "ValidationResult",
    "category_match_ratio",
    "classify",
    "clean_record",
    "completeness",
    "concordance",
    "dataset_statistics",
    "extract_age",
    "extract_age_from_text",
    "extract_decimal",
    "extract_email",
    "extract_integer",
    "extract_salary_from_text",
    "looks_like_name",
    "map_record",
    "merge_fill_if_absent",
    "post_sort",
    "pre_sort",
    "prepare_for_csv",
    "process",
    "project_publication",
    "quality_tier",
    "raw_completeness",
    "transformation_statistics",
    "validate_record",
]

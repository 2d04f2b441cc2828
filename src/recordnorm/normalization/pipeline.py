"""End-to-end normalization of a raw record batch."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

import pandas as pd
from tqdm import tqdm

from .categories import classify
from .mapper import RecordMapper
from .ordering import ClassifiedRecord, post_sort, pre_sort
from .records import CanonicalRecord
from .validators import ValidationIssue, validate_record

__all__ = [
    "EmptyInputError",
    "NormalizationPipeline",
    "NormalizationResult",
    "dataset_statistics",
    "process",
    "transformation_statistics",
]

LOGGER = logging.getLogger(__name__)


class EmptyInputError(ValueError):
    """Raised when a batch is ``None`` or holds no records."""


@dataclass
class NormalizationResult:
    records: List[CanonicalRecord]
    issues: List[ValidationIssue] = field(default_factory=list)
    input_count: int = 0

    @property
    def failed_count(self) -> int:
        return self.input_count - len(self.records)


class NormalizationPipeline:
    """classify → pre-sort → map → clean → post-sort.

    Ids follow the position of each record after the pre-sort (1-based).
    With ``sort_enabled=False`` both sorts are skipped and ids follow the
    input order. ``None`` entries consume an id but produce no record.
    """

    def __init__(self, *, sort_enabled: bool = True, mapper: Optional[RecordMapper] = None) -> None:
        self.sort_enabled = sort_enabled
        self.mapper = mapper or RecordMapper()

    def run(self, batch: Optional[Sequence[Any]], *, show_progress: bool = False) -> NormalizationResult:
        if batch is None or len(batch) == 0:
            raise EmptyInputError("no records provided for normalization")

        if self.sort_enabled:
            classified = pre_sort(batch)
        else:
            classified = [ClassifiedRecord(raw=raw, category=classify(raw)) for raw in batch]

        records: List[CanonicalRecord] = []
        issues: List[ValidationIssue] = []
        iterator = tqdm(classified, desc="Normalizing", disable=not show_progress)
        for position, item in enumerate(iterator, start=1):
            if item.raw is None:
                LOGGER.debug("record.skipped", extra={"record_id": position})
                continue
            mapped = self.mapper.map(item.raw, item.category, position)
            validation = validate_record(mapped, category=item.category)
            records.append(validation.record)
            issues.extend(validation.warnings)

        if self.sort_enabled:
            records = post_sort(records)
        LOGGER.info(
            "pipeline.completed",
            extra={"input": len(batch), "output": len(records), "warnings": len(issues)},
        )
        return NormalizationResult(records=records, issues=issues, input_count=len(batch))


def process(batch: Optional[Sequence[Any]], *, sort_enabled: bool = True) -> List[CanonicalRecord]:
    """Normalize ``batch`` with the default pipeline and return the records."""

    return NormalizationPipeline(sort_enabled=sort_enabled).run(batch).records


def transformation_statistics(original_count: int, transformed_count: int, source_label: str) -> str:
    success_rate = transformed_count / original_count * 100 if original_count > 0 else 0.0
    return "\n".join(
        [
            "Data Transformation Summary:",
            f"Source Type: {source_label}",
            f"Original Objects: {original_count}",
            f"Transformed Successfully: {transformed_count}",
            f"Success Rate: {success_rate:.2f}%",
            f"Failed Transformations: {original_count - transformed_count}",
        ]
    )


def dataset_statistics(records: Sequence[CanonicalRecord], source_label: str) -> str:
    """Totals and averages over canonical records; missing ages/salaries count as 0."""

    frame = pd.DataFrame([record.to_payload() for record in records], columns=["department", "age", "salary"])
    departments = frame["department"].dropna().astype(str).str.strip()
    unique_departments = int(departments[departments != ""].nunique())
    average_age = float(pd.to_numeric(frame["age"], errors="coerce").fillna(0).mean()) if len(frame) else 0.0
    average_salary = float(pd.to_numeric(frame["salary"], errors="coerce").fillna(0).mean()) if len(frame) else 0.0
    return "\n".join(
        [
            f"File: {source_label}",
            f"Total Records: {len(frame)}",
            f"Unique Departments: {unique_departments}",
            f"Average Age: {average_age:.2f}",
            f"Average Salary: {average_salary:.2f}",
        ]
    )

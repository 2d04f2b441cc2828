"""Canonical record model shared by every normalization stage."""
from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "CSV_HEADER",
    "CanonicalRecord",
    "merge_fill_if_absent",
]

CSV_HEADER: Tuple[str, ...] = ("ID", "First Name", "Last Name", "Email", "Age", "Department", "Salary")

# Non-id slots in column order.
VALUE_FIELDS: Tuple[str, ...] = ("first_name", "last_name", "email", "age", "department", "salary")


class CanonicalRecord(BaseModel):
    """Fixed seven-field record produced by the mapper.

    Every field except ``id`` may be ``None``; ``None`` means *unknown*, never
    an empty value.
    """

    id: int
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    age: Optional[int] = None
    department: Optional[str] = None
    salary: Optional[float] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def filled_fields(self) -> List[str]:
        """Names of the non-id fields holding a value (blank strings do not count)."""

        filled: List[str] = []
        for name in VALUE_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            filled.append(name)
        return filled

    def to_row(self) -> List[str]:
        """Render the record in :data:`CSV_HEADER` order; ``None`` becomes ``""``."""

        return [
            str(self.id),
            self.first_name or "",
            self.last_name or "",
            self.email or "",
            "" if self.age is None else str(self.age),
            self.department or "",
            "" if self.salary is None else str(self.salary),
        ]

    def to_payload(self) -> dict:
        """Camel-cased dictionary matching the JSON shape of the record."""

        return self.model_dump(by_alias=True)


def merge_fill_if_absent(target: CanonicalRecord, source: Optional[CanonicalRecord]) -> CanonicalRecord:
    """Copy ``source`` values into ``target`` slots that are still ``None``."""

    if source is None:
        return target
    for name in VALUE_FIELDS:
        if getattr(target, name) is None:
            value = getattr(source, name)
            if value is not None:
                setattr(target, name, value)
    return target

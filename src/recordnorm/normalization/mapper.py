"""Map raw records of any shape onto :class:`CanonicalRecord`."""
from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping, Optional, Sequence

from ..utils.objects import as_field_mapping, is_scalar
from .categories import Category
from .matchers.fields import FieldRole, matches_role, resolve_role
from .parsers.numbers import extract_age, extract_decimal, extract_integer, scalar_text
from .parsers.text import (
    extract_age_from_text,
    extract_email,
    extract_salary_from_text,
    looks_like_name,
)
from .records import CanonicalRecord, merge_fill_if_absent

__all__ = [
    "PUBLICATION_KEYS",
    "RecordMapper",
    "is_publication_shaped",
    "map_record",
    "project_publication",
]

LOGGER = logging.getLogger(__name__)

PUBLICATION_KEYS = frozenset({"title", "authors", "journal"})
TITLE_MAX_LENGTH = 50
TITLE_ELLIPSIS = "..."

_NAME_SEPARATORS = re.compile(r"\s*[-,]\s*")


def _lowered_keys(record: Mapping[Any, Any]) -> dict[str, Any]:
    return {str(key).strip().lower(): value for key, value in record.items()}


def _clean_text(value: Any) -> Optional[str]:
    text = scalar_text(value)
    if text is None:
        return None
    text = text.strip()
    return text or None


def is_publication_shaped(record: Any) -> bool:
    """``True`` for mappings carrying a ``title``, ``authors`` or ``journal`` key."""

    if not isinstance(record, Mapping):
        return False
    return not PUBLICATION_KEYS.isdisjoint(_lowered_keys(record))


def project_publication(record: Mapping[Any, Any], position: int) -> CanonicalRecord:
    """Project a bibliographic entry onto the canonical slots.

    title → firstName (ellipsised past 50 chars), journal → lastName,
    year → age, first author (``et al.`` when several) → department and
    citations × 100 → salary. Missing source fields stay ``None``.
    """

    fields = _lowered_keys(record)
    projected = CanonicalRecord(id=position)

    title = _clean_text(fields.get("title")) if is_scalar(fields.get("title")) else None
    if title is not None and len(title) > TITLE_MAX_LENGTH:
        title = title[: TITLE_MAX_LENGTH - len(TITLE_ELLIPSIS)] + TITLE_ELLIPSIS
    projected.first_name = title

    if is_scalar(fields.get("journal")):
        projected.last_name = _clean_text(fields.get("journal"))

    if is_scalar(fields.get("year")):
        projected.age = extract_integer(fields.get("year"))

    authors = fields.get("authors")
    if isinstance(authors, (list, tuple)) and authors:
        lead = _clean_text(authors[0]) if is_scalar(authors[0]) else None
        if lead is not None:
            projected.department = f"{lead} et al." if len(authors) > 1 else lead
    elif isinstance(authors, str):
        projected.department = _clean_text(authors)

    if is_scalar(fields.get("citations")):
        citations = extract_decimal(fields.get("citations"))
        if citations is not None:
            projected.salary = citations * 100

    return projected


class RecordMapper:
    """Route heterogeneous fields onto the canonical record.

    Scalar fields are routed by name with a fixed precedence (first name, last
    name, email, age, department, salary, then the publication title/journal/
    author fallbacks and the name-shaped value heuristic). Nested mappings and
    the first element of arrays are mapped recursively up to ``max_depth``
    levels and merged without overwriting slots that are already filled.
    """

    def __init__(self, *, max_depth: int = 1) -> None:
        self.max_depth = max_depth

    def map(self, record: Any, category: Optional[Category], position: int) -> CanonicalRecord:
        """Return the canonical record for ``record``; never raises.

        Any failure degrades to an id-only record so the rest of the batch
        keeps flowing.
        """

        try:
            return self._map(record, category, position)
        except Exception as exc:
            LOGGER.warning(
                "record.mapping_failed",
                extra={"record_id": position, "category": getattr(category, "value", category), "error": str(exc)},
            )
            return CanonicalRecord(id=position)

    def _map(self, record: Any, category: Optional[Category], position: int) -> CanonicalRecord:
        if isinstance(record, CanonicalRecord):
            return record.model_copy(update={"id": position})
        if isinstance(record, Mapping):
            mapped = self.map_mapping(record, position)
            if category == Category.PUBLICATION and is_publication_shaped(record):
                projected = project_publication(record, position)
                return merge_fill_if_absent(projected, mapped)
            return mapped
        if isinstance(record, str):
            return self.map_text(record, position)
        fields = as_field_mapping(record)
        if not fields:
            LOGGER.debug("record.no_fields", extra={"record_id": position, "type": type(record).__name__})
            return CanonicalRecord(id=position)
        return self.map_mapping(fields, position, structural=True)

    # ------------------------------------------------------------------ mappings
    def map_mapping(
        self,
        record: Mapping[Any, Any],
        position: int,
        *,
        depth: int = 0,
        structural: bool = False,
    ) -> CanonicalRecord:
        """Map one mapping level.

        ``structural`` records (enumerated object attributes) only take the
        scalar routing; nested containers are ignored for them.
        """

        mapped = CanonicalRecord(id=position)
        for key, value in record.items():
            if value is None:
                continue
            field = str(key).strip().lower()
            if is_scalar(value):
                text = _clean_text(value)
                if text is None:
                    continue
                self._route_scalar(mapped, field, value, text, structural=structural)
                continue
            if structural or depth >= self.max_depth:
                continue
            if isinstance(value, Mapping):
                if value:
                    merge_fill_if_absent(mapped, self.map_mapping(value, position, depth=depth + 1))
            elif isinstance(value, (list, tuple)):
                if value:
                    self._route_sequence(mapped, field, value, position, depth)
        return mapped

    def _route_scalar(self, mapped: CanonicalRecord, field: str, raw: Any, text: str, *, structural: bool) -> None:
        role = resolve_role(field)
        if role is FieldRole.FIRST_NAME:
            mapped.first_name = text
        elif role is FieldRole.LAST_NAME:
            mapped.last_name = text
        elif role is FieldRole.EMAIL:
            mapped.email = text
        elif role is FieldRole.AGE:
            age = extract_age(raw)
            if age is not None:
                mapped.age = age
        elif role is FieldRole.DEPARTMENT:
            mapped.department = text
        elif role is FieldRole.SALARY:
            salary = extract_decimal(raw)
            if salary is not None:
                mapped.salary = salary
        elif not structural and matches_role(field, FieldRole.PUBLICATION_TITLE):
            mapped.first_name = text
        elif not structural and matches_role(field, FieldRole.JOURNAL):
            mapped.last_name = text
        elif not structural and matches_role(field, FieldRole.AUTHOR):
            mapped.first_name = text
        elif mapped.first_name is None and isinstance(raw, str) and looks_like_name(text):
            mapped.first_name = text

    # ------------------------------------------------------------------ arrays
    def _route_sequence(
        self,
        mapped: CanonicalRecord,
        field: str,
        items: Sequence[Any],
        position: int,
        depth: int,
    ) -> None:
        if "publication" in field:
            self._apply_publication_entry(mapped, items[0])
        elif "author" in field:
            self._apply_first_author(mapped, items[0])
        else:
            for item in items:
                if isinstance(item, Mapping):
                    merge_fill_if_absent(mapped, self.map_mapping(item, position, depth=depth + 1))
                    break
                if isinstance(item, str):
                    if mapped.first_name is None:
                        mapped.first_name = _clean_text(item)
                    break

    @staticmethod
    def _apply_publication_entry(mapped: CanonicalRecord, entry: Any) -> None:
        if not isinstance(entry, Mapping):
            return
        for key, value in entry.items():
            if value is None:
                continue
            field = str(key).lower()
            if "title" in field and mapped.first_name is None:
                mapped.first_name = _clean_text(value) if is_scalar(value) else None
            elif "journal" in field and mapped.last_name is None:
                mapped.last_name = _clean_text(value) if is_scalar(value) else None
            elif "author" in field and mapped.first_name is None:
                if isinstance(value, (list, tuple)):
                    if value and is_scalar(value[0]):
                        mapped.first_name = _clean_text(value[0])
                elif is_scalar(value):
                    mapped.first_name = _clean_text(value)

    @staticmethod
    def _apply_first_author(mapped: CanonicalRecord, author: Any) -> None:
        if mapped.first_name is not None or not isinstance(author, str):
            return
        parts = author.split(None, 1)
        if not parts:
            return
        mapped.first_name = parts[0]
        if len(parts) == 2 and mapped.last_name is None:
            mapped.last_name = parts[1].strip()

    # ------------------------------------------------------------------ text
    def map_text(self, text: str, position: int) -> CanonicalRecord:
        """Pull email, age, salary and name parts out of a bare string."""

        mapped = CanonicalRecord(id=position)
        cleaned = text.strip()
        if not cleaned:
            return mapped

        email = extract_email(cleaned)
        if email is not None:
            mapped.email = email
            cleaned = cleaned.replace(email, "").strip()

        mapped.age = extract_age_from_text(cleaned)
        mapped.salary = extract_salary_from_text(cleaned)

        parts: List[str] = _NAME_SEPARATORS.split(cleaned)
        while parts and not parts[-1]:
            parts.pop()
        if len(parts) >= 2:
            mapped.first_name = parts[0].strip() or None
            mapped.last_name = parts[1].strip() or None
        elif parts and parts[0]:
            mapped.first_name = parts[0].strip()
        return mapped


_DEFAULT_MAPPER = RecordMapper()


def map_record(record: Any, category: Optional[Category], position: int) -> CanonicalRecord:
    """Module-level shortcut for :meth:`RecordMapper.map` with default settings."""

    return _DEFAULT_MAPPER.map(record, category, position)

"""Two-phase ordering: raw records by category, canonical records by quality."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Dict, List, Mapping, Sequence

from ..utils.objects import as_field_mapping
from .categories import CATEGORY_ORDER, Category, category_match_ratio, classify
from .parsers.numbers import scalar_text
from .records import CanonicalRecord
from .scoring import TIER_ORDER, completeness, concordance, quality_tier

__all__ = [
    "ClassifiedRecord",
    "post_sort",
    "pre_sort",
    "raw_completeness",
]

LOGGER = logging.getLogger(__name__)

RAW_COMPLETENESS_TOLERANCE = 10
CONCORDANCE_TOLERANCE = 10
COMPLETENESS_TOLERANCE = 5
FALLBACK_COMPLETENESS = 25


@dataclass(frozen=True)
class ClassifiedRecord:
    raw: Any
    category: Category


def _has_text(value: Any) -> bool:
    if value is None:
        return False
    text = scalar_text(value) if isinstance(value, (str, int, float, bool)) else str(value)
    return bool(text and text.strip())


def raw_completeness(raw: Any) -> int:
    """Share (0–100) of a raw record's fields holding a non-blank value.

    Strings score 50 (0 when blank); objects are enumerated structurally and
    anything that cannot be enumerated scores a neutral 25.
    """

    if raw is None:
        return 0
    if isinstance(raw, str):
        return 50 if raw.strip() else 0
    try:
        fields = raw if isinstance(raw, Mapping) else as_field_mapping(raw)
        if fields is None:
            return FALLBACK_COMPLETENESS
        if not fields:
            return 0
        filled = sum(1 for value in fields.values() if _has_text(value))
        return filled * 100 // len(fields)
    except Exception as exc:
        LOGGER.debug("record.completeness_failed", extra={"error": str(exc)})
        return FALLBACK_COMPLETENESS


def _fingerprint(raw: Any) -> str:
    try:
        return json.dumps(raw, sort_keys=True, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(raw)


def pre_sort(raw_records: Sequence[Any]) -> List[ClassifiedRecord]:
    """Group raw records by category and order each group by quality.

    Within a group the more complete record comes first; when the two raw
    completeness scores are within 10 points the higher category-match ratio
    wins. Each group is first ordered by a content fingerprint, which also
    breaks the remaining ties, so the result does not depend on input order.
    """

    groups: Dict[Category, List[ClassifiedRecord]] = {category: [] for category in CATEGORY_ORDER}
    for raw in raw_records:
        category = classify(raw)
        groups[category].append(ClassifiedRecord(raw=raw, category=category))

    ordered: List[ClassifiedRecord] = []
    for category in CATEGORY_ORDER:
        group = groups[category]
        if not group:
            continue
        scores = {
            id(item): (raw_completeness(item.raw), category_match_ratio(item.raw, category), _fingerprint(item.raw))
            for item in group
        }

        def _compare(left: ClassifiedRecord, right: ClassifiedRecord) -> int:
            l_complete, l_ratio, l_print = scores[id(left)]
            r_complete, r_ratio, r_print = scores[id(right)]
            if abs(l_complete - r_complete) <= RAW_COMPLETENESS_TOLERANCE:
                if l_ratio != r_ratio:
                    return r_ratio - l_ratio
                return (l_print > r_print) - (l_print < r_print)
            return r_complete - l_complete

        # The tolerance comparator is not transitive; start every sort from the same order.
        group.sort(key=lambda item: scores[id(item)][2])
        group.sort(key=cmp_to_key(_compare))
        LOGGER.debug("ordering.group", extra={"category": category.value, "size": len(group)})
        ordered.extend(group)
    return ordered


def _compare_text(left: str | None, right: str | None) -> int:
    if left is None or right is None:
        return 0
    left_key, right_key = left.casefold(), right.casefold()
    return (left_key > right_key) - (left_key < right_key)


def post_sort(records: Sequence[CanonicalRecord]) -> List[CanonicalRecord]:
    """Order canonical records by tier, concordance, completeness, names and id.

    Concordance differences up to 10 points and completeness differences up
    to 5 points count as ties. Names compare case-insensitively and only when
    both sides are present.
    """

    tiers: Dict[Any, List[CanonicalRecord]] = {tier: [] for tier in TIER_ORDER}
    for record in records:
        tiers[quality_tier(record)].append(record)

    def _compare(left: CanonicalRecord, right: CanonicalRecord) -> int:
        l_conc, r_conc = concordance(left), concordance(right)
        if abs(l_conc - r_conc) > CONCORDANCE_TOLERANCE:
            return r_conc - l_conc
        l_comp, r_comp = completeness(left), completeness(right)
        if abs(l_comp - r_comp) > COMPLETENESS_TOLERANCE:
            return r_comp - l_comp
        by_last = _compare_text(left.last_name, right.last_name)
        if by_last:
            return by_last
        by_first = _compare_text(left.first_name, right.first_name)
        if by_first:
            return by_first
        return (left.id > right.id) - (left.id < right.id)

    ordered: List[CanonicalRecord] = []
    for tier in TIER_ORDER:
        group = sorted(tiers[tier], key=cmp_to_key(_compare))
        ordered.extend(group)
    return ordered

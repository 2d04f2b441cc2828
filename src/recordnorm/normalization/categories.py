"""Rule-based classification of raw records into semantic categories."""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple

__all__ = [
    "Category",
    "CATEGORY_ORDER",
    "CATEGORY_PATTERNS",
    "CLASSIFICATION_PRIORITY",
    "MIN_SIGNATURE_MATCHES",
    "category_match_count",
    "category_match_ratio",
    "classify",
]


class Category(str, Enum):
    PERSON = "PERSON"
    PUBLICATION = "PUBLICATION"
    MEDICAL = "MEDICAL"
    PRODUCT = "PRODUCT"
    STUDENT = "STUDENT"
    MIXED = "MIXED"
    STRING = "STRING"
    UNKNOWN = "UNKNOWN"


# English / Spanish / French / German field-name fragments per category.
CATEGORY_PATTERNS: Mapping[Category, re.Pattern[str]] = {
    Category.PERSON: re.compile(
        r"name|nombre|nom|namen|first.*name|last.*name|surname|apellido|"
        r"email|correo|courriel|age|edad|"
        r"department|departamento|departement|abteilung|salary|salario|salaire|gehalt"
    ),
    Category.PUBLICATION: re.compile(
        r"title|titulo|titre|titel|journal|revista|revue|zeitschrift|"
        r"author|autor|auteur|verfasser|publication|publicacion|doi|issn|year|año|jahr"
    ),
    Category.MEDICAL: re.compile(
        r"patient|paciente|diagnosis|diagnostico|diagnostic|diagnose|"
        r"treatment|tratamiento|traitement|behandlung|doctor|medico|medecin|arzt|"
        r"hospital|hopital|krankenhaus|clinic|clinique|klinik"
    ),
    Category.PRODUCT: re.compile(
        r"product|producto|produit|produkt|price|precio|prix|preis|"
        r"category|categoria|categorie|kategorie|inventory|inventario|inventaire|"
        r"stock|description|descripcion|beschreibung"
    ),
    Category.STUDENT: re.compile(
        r"student|estudiante|etudiant|grade|nota|course|curso|cours|kurs|"
        r"university|universidad|universite|universitat|career|carrera|carriere"
    ),
}

# Tie-break when several signatures qualify.
CLASSIFICATION_PRIORITY: Tuple[Category, ...] = (
    Category.PERSON,
    Category.PUBLICATION,
    Category.MEDICAL,
    Category.PRODUCT,
    Category.STUDENT,
)

# Grouping order used when ordering raw records.
CATEGORY_ORDER: Tuple[Category, ...] = (
    Category.PERSON,
    Category.PUBLICATION,
    Category.MEDICAL,
    Category.PRODUCT,
    Category.STUDENT,
    Category.MIXED,
    Category.STRING,
    Category.UNKNOWN,
)

MIN_SIGNATURE_MATCHES = 2
DEFAULT_MATCH_RATIO = 25


def _field_names(record: Mapping[Any, Any]) -> set[str]:
    return {str(key).lower() for key in record.keys()}


def category_match_count(field_names: Iterable[str], category: Category) -> int:
    """Count how many lower-cased ``field_names`` hit the ``category`` signature."""

    pattern = CATEGORY_PATTERNS.get(category)
    if pattern is None:
        return 0
    return sum(1 for name in field_names if pattern.search(name))


def classify(record: Any) -> Category:
    """Assign a :class:`Category` to a raw record.

    Bare strings are ``STRING``, non-mappings are ``UNKNOWN``. Mappings qualify
    for a category when at least two field names hit its signature; the first
    qualifying category in :data:`CLASSIFICATION_PRIORITY` wins, otherwise the
    record is ``MIXED``.
    """

    if isinstance(record, str):
        return Category.STRING
    if not isinstance(record, Mapping):
        return Category.UNKNOWN

    names = _field_names(record)
    for category in CLASSIFICATION_PRIORITY:
        if category_match_count(names, category) >= MIN_SIGNATURE_MATCHES:
            return category
    return Category.MIXED


def category_match_ratio(record: Any, category: Optional[Category]) -> int:
    """Percentage (0–100) of the record's fields matching ``category``.

    Categories without a signature (MIXED, STRING, UNKNOWN) score a flat 25;
    anything that is not a mapping scores 0.
    """

    if not isinstance(record, Mapping):
        return 0
    if category not in CATEGORY_PATTERNS:
        return DEFAULT_MATCH_RATIO
    names = _field_names(record)
    if not names:
        return 0
    return category_match_count(names, category) * 100 // len(names)

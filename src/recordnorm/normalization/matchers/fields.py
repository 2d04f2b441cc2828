"""Multi-language field-name matchers for the canonical record roles."""
from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Mapping, Optional, Sequence, Tuple

__all__ = [
    "FieldRole",
    "ROLE_PATTERNS",
    "ROLE_EXACT_NAMES",
    "CANONICAL_ROLES",
    "matches_role",
    "resolve_role",
]


class FieldRole(str, Enum):
    """Semantic role a raw field name can play."""

    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    EMAIL = "email"
    AGE = "age"
    DEPARTMENT = "department"
    SALARY = "salary"
    PUBLICATION_TITLE = "publicationTitle"
    JOURNAL = "journal"
    AUTHOR = "author"


# Substring alternations, matched against the lower-cased field name.
ROLE_PATTERNS: Mapping[FieldRole, Tuple[str, ...]] = {
    FieldRole.FIRST_NAME: (
        "firstname",
        "first_name",
        "fname",
        "given_name",
        "prenom",
        "vorname",
        "student_first_name",
        "patient_first_name",
        "product_name",
        "client_name",
        "title",
        "titulo",
        "titre",
        "titel",
        "generated_by",
    ),
    FieldRole.LAST_NAME: (
        "lastname",
        "last_name",
        "lname",
        "surname",
        "family_name",
        "apellido",
        "nom_famille",
        "nachname",
        "student_last_name",
        "patient_last_name",
        "journal",
        "revista",
        "revue",
        "zeitschrift",
    ),
    FieldRole.EMAIL: (
        "email",
        "mail",
        "correo",
        "courriel",
        "e_mail",
        "university_email",
        "contact_email",
        "email_address",
    ),
    FieldRole.AGE: (
        "age",
        "years",
        "edad",
        "anos",
        "annee",
        "alter",
        "student_age",
        "patient_age",
        "age_years",
    ),
    FieldRole.DEPARTMENT: (
        "department",
        "dept",
        "area",
        "division",
        "departamento",
        "departement",
        "abteilung",
        "major",
        "specialite",
        "studiengang",
        "category",
        "tipo",
    ),
    FieldRole.SALARY: (
        "salary",
        "salario",
        "wage",
        "income",
        "sueldo",
        "salaire",
        "gehalt",
        "price",
        "precio",
        "prix",
        "cost",
    ),
    FieldRole.PUBLICATION_TITLE: (
        "title",
        "titulo",
        "titre",
        "titel",
        "publication_title",
        "article_title",
    ),
    FieldRole.JOURNAL: (
        "journal",
        "revista",
        "revue",
        "zeitschrift",
        "publication",
        "venue",
    ),
    FieldRole.AUTHOR: (
        "author",
        "autor",
        "auteur",
        "verfasser",
        "authors",
        "writers",
        "generated_by",
    ),
}

# Whole-name matches that would be too greedy as substrings.
ROLE_EXACT_NAMES: Mapping[FieldRole, Tuple[str, ...]] = {
    FieldRole.FIRST_NAME: ("name", "nombre", "nom"),
}

# Roles that map onto a canonical slot, in routing precedence order.
CANONICAL_ROLES: Tuple[FieldRole, ...] = (
    FieldRole.FIRST_NAME,
    FieldRole.LAST_NAME,
    FieldRole.EMAIL,
    FieldRole.AGE,
    FieldRole.DEPARTMENT,
    FieldRole.SALARY,
)


def _compile(patterns: Sequence[str]) -> re.Pattern[str]:
    return re.compile("|".join(re.escape(item) for item in patterns))


_COMPILED: Dict[FieldRole, re.Pattern[str]] = {role: _compile(items) for role, items in ROLE_PATTERNS.items()}


def _normalize_field_name(field_name: object) -> str:
    return str(field_name).strip().lower()


def matches_role(field_name: Optional[object], role: FieldRole) -> bool:
    """Return ``True`` when ``field_name`` looks like a field for ``role``."""

    if field_name is None:
        return False
    lowered = _normalize_field_name(field_name)
    if lowered in ROLE_EXACT_NAMES.get(role, ()):
        return True
    return _COMPILED[role].search(lowered) is not None


def resolve_role(field_name: Optional[object], roles: Sequence[FieldRole] = CANONICAL_ROLES) -> Optional[FieldRole]:
    """Return the first role in ``roles`` matching ``field_name``."""

    for role in roles:
        if matches_role(field_name, role):
            return role
    return None

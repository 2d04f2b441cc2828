"""Field-name matchers for canonical record roles."""

from .fields import CANONICAL_ROLES, ROLE_EXACT_NAMES, ROLE_PATTERNS, FieldRole, matches_role, resolve_role

__all__ = [
    "CANONICAL_ROLES",
    "FieldRole",
    "ROLE_EXACT_NAMES",
    "ROLE_PATTERNS",
    "matches_role",
    "resolve_role",
]

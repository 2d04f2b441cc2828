"""Structural field enumeration for records that are not plain mappings."""
from __future__ import annotations

import dataclasses
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel

__all__ = ["as_field_mapping", "is_scalar"]

_SCALAR_TYPES = (str, int, float, bool)


def is_scalar(value: Any) -> bool:
    """Return ``True`` for JSON-like leaf values."""

    return value is None or isinstance(value, _SCALAR_TYPES)


def as_field_mapping(obj: Any) -> Optional[Dict[str, Any]]:
    """Expose the public fields of ``obj`` as a name → value mapping.

    Mappings are returned as shallow copies. Dataclasses, pydantic models,
    named tuples and plain objects with ``__dict__`` are flattened one level.
    Scalars, sequences and anything without enumerable fields yield ``None``.
    """

    if obj is None or is_scalar(obj):
        return None
    if isinstance(obj, Mapping):
        return {str(key): value for key, value in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}
    if isinstance(obj, BaseModel):
        return {name: getattr(obj, name) for name in type(obj).model_fields}
    as_dict = getattr(obj, "_asdict", None)
    if isinstance(obj, tuple) and callable(as_dict):
        return dict(as_dict())
    if isinstance(obj, (list, tuple, set, frozenset)):
        return None
    attributes = getattr(obj, "__dict__", None)
    if isinstance(attributes, Mapping):
        return {name: value for name, value in attributes.items() if not name.startswith("_")}
    return None

"""Read raw records from JSON documents."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Mapping

__all__ = ["COLLECTION_KEYS", "JsonSourceError", "decode_node", "read_raw_records"]

LOGGER = logging.getLogger(__name__)

# Wrapper keys holding the record array, in order of preference.
COLLECTION_KEYS = ("persons", "publications")


class JsonSourceError(RuntimeError):
    """Raised when a JSON source cannot be turned into a record batch."""


def decode_node(node: Any) -> Any:
    """Convert a decoded JSON node into plain dict / list / scalar values."""

    if isinstance(node, Mapping):
        return {str(key): decode_node(value) for key, value in node.items()}
    if isinstance(node, (list, tuple)):
        return [decode_node(item) for item in node]
    return node


def _check_path(path: str | os.PathLike[str] | None) -> Path:
    if path is None or not str(path).strip():
        raise JsonSourceError("JSON file path cannot be empty")
    candidate = Path(path)
    if not candidate.exists():
        raise JsonSourceError(f"JSON file does not exist: {candidate}")
    if not candidate.is_file():
        raise JsonSourceError(f"Path is not a regular file: {candidate}")
    if not os.access(candidate, os.R_OK):
        raise JsonSourceError(f"JSON file is not readable: {candidate}")
    if candidate.stat().st_size == 0:
        raise JsonSourceError(f"JSON file is empty: {candidate}")
    return candidate


def _records_from_root(root: Any) -> List[Any]:
    if isinstance(root, list):
        return [decode_node(item) for item in root]
    if isinstance(root, Mapping):
        for key in COLLECTION_KEYS:
            collection = root.get(key)
            if isinstance(collection, list):
                LOGGER.debug("source.collection", extra={"key": key, "size": len(collection)})
                return [decode_node(item) for item in collection]
        return [decode_node(root)]
    if isinstance(root, str):
        return [root]
    raise JsonSourceError(f"Unsupported JSON root of type {type(root).__name__}")


def read_raw_records(path: str | os.PathLike[str] | None) -> List[Any]:
    """Load ``path`` and return its raw records.

    Arrays yield one record per element, objects wrapping a ``persons`` or
    ``publications`` array yield that array and any other object becomes a
    single record. A bare string root is a single string record.
    """

    source = _check_path(path)
    try:
        with source.open("r", encoding="utf-8") as handle:
            root = json.load(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise JsonSourceError(f"Unable to read {source}: {exc}") from exc
    except ValueError as exc:
        raise JsonSourceError(f"Invalid JSON in {source}: {exc}") from exc

    if root is None:
        raise JsonSourceError(f"JSON root is null in {source}")
    records = _records_from_root(root)
    LOGGER.info("source.loaded", extra={"path": str(source), "records": len(records)})
    return records

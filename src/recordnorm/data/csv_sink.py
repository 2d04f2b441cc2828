"""Write canonical records as delimited text."""
from __future__ import annotations

import csv
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from ..normalization.records import CSV_HEADER, CanonicalRecord

__all__ = ["CsvWriteError", "append_csv", "resolve_delimiter", "write_csv"]

LOGGER = logging.getLogger(__name__)

_ESCAPES = {"\\t": "\t", "\\n": "\n", "\\r": "\r", "\\\\": "\\"}


class CsvWriteError(RuntimeError):
    """Raised when records cannot be written to the CSV target."""


def resolve_delimiter(delimiter: Optional[str]) -> str:
    """Translate escape sequences such as ``\\t`` and check the result is one character."""

    if delimiter is None or delimiter == "":
        return ","
    resolved = _ESCAPES.get(delimiter, delimiter)
    if len(resolved) != 1:
        raise CsvWriteError(f"CSV delimiter must be a single character, got {delimiter!r}")
    if resolved in {'"', "'"}:
        raise CsvWriteError("Quote characters cannot be used as CSV delimiter")
    return resolved


def _check_target(records: Optional[Sequence[CanonicalRecord]], path: str | os.PathLike[str] | None) -> Path:
    if not records:
        raise CsvWriteError("No records to write")
    if path is None or not str(path).strip():
        raise CsvWriteError("CSV file path cannot be empty")
    target = Path(path)
    if target.suffix.lower() != ".csv":
        LOGGER.warning("sink.unexpected_suffix", extra={"path": str(target)})
    return target


def _write(records: Sequence[CanonicalRecord], target: Path, *, mode: str, delimiter: str, header: bool) -> Path:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open(mode, encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle, delimiter=delimiter)
            if header:
                writer.writerow(CSV_HEADER)
            for record in records:
                writer.writerow(record.to_row())
    except OSError as exc:
        raise CsvWriteError(f"Unable to write CSV file {target}: {exc}") from exc
    LOGGER.info("sink.written", extra={"path": str(target), "records": len(records), "mode": mode})
    return target


def write_csv(
    records: Optional[Sequence[CanonicalRecord]],
    path: str | os.PathLike[str] | None,
    *,
    delimiter: str = ",",
    include_header: bool = True,
) -> Path:
    """Overwrite ``path`` with ``records``; returns the written path."""

    target = _check_target(records, path)
    return _write(records, target, mode="w", delimiter=resolve_delimiter(delimiter), header=include_header)


def append_csv(
    records: Optional[Sequence[CanonicalRecord]],
    path: str | os.PathLike[str] | None,
    *,
    delimiter: str = ",",
) -> Path:
    """Append ``records``; the header is written only when the file is new."""

    target = _check_target(records, path)
    is_new = not target.exists()
    return _write(records, target, mode="a", delimiter=resolve_delimiter(delimiter), header=is_new)

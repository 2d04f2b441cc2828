import csv
import logging
from pathlib import Path

import pytest

from recordnorm.data.csv_sink import CsvWriteError, append_csv, resolve_delimiter, write_csv
from recordnorm.normalization.records import CSV_HEADER, CanonicalRecord


def _records():
    return [
        CanonicalRecord(id=1, first_name="Ana", last_name="Ruiz", email="ana@ruiz.es", age=31, salary=1200.0),
        CanonicalRecord(id=2, first_name="Bob, Jr.", department="Ops"),
    ]


def _rows(path: Path, delimiter: str = ","):
    with path.open(encoding="utf-8", newline="") as handle:
        return list(csv.reader(handle, delimiter=delimiter))


def test_write_csv_with_header(tmp_path: Path) -> None:
    target = write_csv(_records(), tmp_path / "out" / "people.csv")
    rows = _rows(target)
    assert rows[0] == list(CSV_HEADER)
    assert rows[1] == ["1", "Ana", "Ruiz", "ana@ruiz.es", "31", "", "1200.0"]
    assert rows[2] == ["2", "Bob, Jr.", "", "", "", "Ops", ""]


def test_write_csv_without_header_and_custom_delimiter(tmp_path: Path) -> None:
    target = write_csv(_records(), tmp_path / "people.tsv.csv", delimiter="\\t", include_header=False)
    rows = _rows(target, delimiter="\t")
    assert len(rows) == 2
    assert rows[0][1] == "Ana"


def test_append_writes_header_only_once(tmp_path: Path) -> None:
    target = tmp_path / "people.csv"
    append_csv(_records()[:1], target)
    append_csv(_records()[1:], target)
    rows = _rows(target)
    assert rows[0] == list(CSV_HEADER)
    assert [row[0] for row in rows[1:]] == ["1", "2"]


def test_missing_csv_suffix_is_logged(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="recordnorm.data.csv_sink"):
        write_csv(_records(), tmp_path / "people.txt")
    assert any(entry.getMessage() == "sink.unexpected_suffix" for entry in caplog.records)


@pytest.mark.parametrize("records", [None, []])
def test_empty_records_are_rejected(tmp_path: Path, records) -> None:
    with pytest.raises(CsvWriteError):
        write_csv(records, tmp_path / "x.csv")


def test_empty_path_is_rejected() -> None:
    with pytest.raises(CsvWriteError):
        write_csv(_records(), "")


def test_io_errors_are_wrapped(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(CsvWriteError):
        write_csv(_records(), blocker / "people.csv")


@pytest.mark.parametrize(
    "raw, expected",
    [(None, ","), ("", ","), (";", ";"), ("\\t", "\t"), ("|", "|")],
)
def test_resolve_delimiter(raw, expected) -> None:
    assert resolve_delimiter(raw) == expected


@pytest.mark.parametrize("raw", ['"', "'", ";;"])
def test_resolve_delimiter_rejects_bad_values(raw) -> None:
    with pytest.raises(CsvWriteError):
        resolve_delimiter(raw)

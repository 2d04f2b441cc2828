"""JSON sources and CSV sinks around the normalization engine."""

from .csv_sink import CsvWriteError, append_csv, resolve_delimiter, write_csv
from .json_source import JsonSourceError, decode_node, read_raw_records

__all__ = [
    "CsvWriteError",
    "JsonSourceError",
    "append_csv",
    "decode_node",
    "read_raw_records",
    "resolve_delimiter",
    "write_csv",
]

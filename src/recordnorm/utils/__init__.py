"""Shared helpers for logging and record introspection."""

from .logging import configure_json_logger, flush_handlers, generate_trace_id, log_event
from .objects import as_field_mapping

__all__ = [
    "as_field_mapping",
    "configure_json_logger",
    "flush_handlers",
    "generate_trace_id",
    "log_event",
]

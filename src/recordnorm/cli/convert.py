"""CLI command converting a JSON document into a normalized CSV file."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from ..config import ConversionSettings, get_settings
from ..data import CsvWriteError, JsonSourceError, read_raw_records, write_csv
from ..normalization import EmptyInputError, NormalizationPipeline, prepare_for_csv, transformation_statistics
from ..utils.logging import configure_json_logger, flush_handlers, generate_trace_id, log_event

__all__ = ["convert_command", "resolve_paths"]


def resolve_paths(
    settings: ConversionSettings,
    input_path: Optional[Path],
    output_path: Optional[Path],
) -> tuple[Path, Path]:
    """Command-line paths win over the configured ones; both must end up set."""

    source = input_path or settings.input_path
    target = output_path or settings.output_path
    if source is None:
        raise typer.BadParameter("an input JSON file is required (--input or paths.input)")
    if target is None:
        raise typer.BadParameter("an output CSV file is required (--output or paths.output)")
    return source, target


def convert_command(
    input_path: Optional[Path] = typer.Option(None, "--input", "-i", dir_okay=False, help="JSON file to normalize"),
    output_path: Optional[Path] = typer.Option(None, "--output", "-o", dir_okay=False, help="CSV file to write"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Field delimiter (escapes like \\t allowed)"),
    no_header: bool = typer.Option(False, "--no-header", help="Omit the CSV header row"),
    no_sort: bool = typer.Option(False, "--no-sort", help="Keep input order and skip both ordering phases"),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config-file",
        exists=True,
        dir_okay=False,
        readable=True,
        help="TOML/YAML configuration overriding environment defaults",
    ),
    log_file: Optional[Path] = typer.Option(None, "--log-file", dir_okay=False, help="JSONL log destination"),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar while normalizing"),
) -> None:
    """Read raw records, normalize them and write the canonical CSV."""

    try:
        settings = get_settings(refresh=config_file is None, config_file=config_file)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    source, target = resolve_paths(settings, input_path, output_path)
    include_header = settings.include_header and not no_header
    sort_enabled = settings.sort_enabled and not no_sort
    resolved_delimiter = delimiter if delimiter is not None else settings.delimiter

    logger = configure_json_logger(log_file or settings.log_file)
    trace_id = generate_trace_id()
    log_event(
        logger,
        "convert.start",
        trace_id=trace_id,
        input=str(source),
        output=str(target),
        delimiter=resolved_delimiter,
        include_header=include_header,
        sort_enabled=sort_enabled,
    )

    try:
        batch = read_raw_records(source)
        result = NormalizationPipeline(sort_enabled=sort_enabled).run(batch, show_progress=progress)
        write_csv(
            prepare_for_csv(result.records),
            target,
            delimiter=resolved_delimiter,
            include_header=include_header,
        )
    except (JsonSourceError, CsvWriteError, EmptyInputError) as exc:
        log_event(logger, "convert.failed", trace_id=trace_id, level=logging.ERROR, error=str(exc))
        flush_handlers(logger)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    summary = {
        "status": "completed",
        "input": str(source),
        "output": str(target),
        "records": len(result.records),
        "warnings": len(result.issues),
        "trace_id": trace_id,
    }
    typer.echo(json.dumps(summary, indent=2, ensure_ascii=False))
    typer.echo(transformation_statistics(result.input_count, len(result.records), "JSON"))
    log_event(
        logger,
        "convert.completed",
        trace_id=trace_id,
        records=len(result.records),
        warnings=len(result.issues),
    )
    flush_handlers(logger)

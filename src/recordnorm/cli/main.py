from pathlib import Path

import json
import typer

from .._version import __version__
from ..data import JsonSourceError, read_raw_records
from ..normalization import EmptyInputError, category_match_ratio, classify, dataset_statistics, process
from .config import app as config_app
from .convert import convert_command


__all__ = ["app", "run"]


app = typer.Typer(help="Normalize schema-less JSON records into canonical CSV rows", add_completion=False)


@app.callback(invoke_without_command=True)
def version_callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show recordnorm version and exit", is_eager=True),
) -> None:
    """Handle global options before any sub-command executes."""

    if version:
        typer.echo(f"recordnorm {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.command("convert", help="Normalize a JSON document and write it as CSV.")(convert_command)
app.add_typer(config_app, name="config")


def _load(input_path: Path) -> list:
    try:
        return read_raw_records(input_path)
    except JsonSourceError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("classify")
def classify_command(
    input_path: Path = typer.Option(..., "--input", "-i", dir_okay=False, help="JSON file to inspect"),
) -> None:
    """Print the category and match ratio of every raw record as JSON lines."""

    for index, raw in enumerate(_load(input_path), start=1):
        category = classify(raw)
        typer.echo(
            json.dumps(
                {
                    "index": index,
                    "category": category.value,
                    "match_ratio": category_match_ratio(raw, category),
                },
                ensure_ascii=False,
            )
        )


@app.command("stats")
def stats_command(
    input_path: Path = typer.Option(..., "--input", "-i", dir_okay=False, help="JSON file to summarise"),
) -> None:
    """Summarise departments, ages and salaries of the normalized records."""

    batch = _load(input_path)
    try:
        records = process(batch)
    except EmptyInputError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(dataset_statistics(records, str(input_path)))


def run() -> None:
    """Entry point compatible with ``python -m recordnorm.cli.main`` and console scripts."""

    from typer.main import get_command

    cli = get_command(app)
    cli()


if __name__ == "__main__":
    run()

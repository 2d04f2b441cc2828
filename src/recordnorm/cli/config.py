"""Commands to inspect and bootstrap recordnorm settings."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from ..config import get_settings, write_default_config

__all__ = ["app"]

app = typer.Typer(help="Inspect or create conversion settings.", add_completion=False)


@app.command("show")
def show_settings(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config-file",
        exists=True,
        dir_okay=False,
        readable=True,
        help="TOML/YAML configuration to resolve instead of the environment only.",
    ),
    refresh: bool = typer.Option(False, "--refresh", help="Ignore the cached settings."),
) -> None:
    """Print the resolved settings as JSON."""

    try:
        settings = get_settings(refresh=refresh, config_file=config_file)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(settings.as_dict(), indent=2, ensure_ascii=False))


@app.command("init")
def init_settings(
    output: Path = typer.Option(
        Path("recordnorm.yaml"),
        "--output",
        dir_okay=False,
        writable=True,
        help="YAML file to create with the default settings.",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file."),
) -> None:
    """Write a YAML configuration populated with the defaults."""

    if output.exists() and not force:
        typer.echo(f"Error: {output} already exists (use --force to overwrite)", err=True)
        raise typer.Exit(code=1)
    written = write_default_config(output)
    typer.echo(json.dumps({"output": str(written)}, indent=2, ensure_ascii=False))

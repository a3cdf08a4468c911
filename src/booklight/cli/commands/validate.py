"""Validate command for checking configuration files."""

from pathlib import Path
from typing import Annotated

import typer

from booklight.application.config import (
    ConfigError,
    config_to_cases,
    config_to_globals,
    load_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a layout configuration file.

    Checks JSON syntax, the schema, and that every case leaves positive
    internal dimensions. Prints the internal size of each case.

    Exit codes:
        0 - Configuration is valid
        1 - Configuration has errors

    Example:
        booklight validate cases.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
        globals_ = config_to_globals(config.sheet)
        cases = config_to_cases(config)
    except ConfigError as e:
        display_config_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        f'Sheet: {globals_.sheet_w}" x {globals_.sheet_h}" '
        f'(usable {globals_.usable_width:.2f}" x {globals_.usable_height:.2f}")'
    )
    for case in cases:
        typer.echo(
            f'  {case.id} ({case.name}): inner {case.inner_width:.3f}" x '
            f'{case.inner_depth:.3f}", wall {case.wall_height:.3f}", '
            f"{case.mag_count} magnets"
        )
    typer.echo()
    typer.echo("Configuration is valid.")


def display_config_error(error: ConfigError) -> None:
    """Print a configuration error to stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for issue in error.issues:
            typer.echo(f"    {issue}", err=True)
    elif error.error_type == "validation":
        for issue in error.issues:
            typer.echo(f"  {issue}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

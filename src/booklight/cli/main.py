"""Typer CLI for book case sheet layouts."""

import dataclasses
import logging
from pathlib import Path
from typing import Annotated

import typer

from booklight.application import GenerateLayoutCommand, LayoutFailedError, LayoutOutput
from booklight.application.config import (
    ConfigError,
    ConfigIssue,
    config_to_cases,
    config_to_globals,
    load_config,
)
from booklight.cli.commands import display_config_error, validate_command
from booklight.domain import SheetGlobals
from booklight.infrastructure.exporters import ExporterRegistry, ExportManager

app = typer.Typer(
    name="booklight",
    help="Generate laser-cut book case parts and lay them out on sheets.",
)

app.command(name="validate")(validate_command)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def parse_formats(formats_str: str) -> list[str]:
    """Parse a comma-separated format list or "all".

    Raises:
        typer.Exit: If a format is not registered.
    """
    if formats_str.lower() == "all":
        return ExporterRegistry.available_formats()

    formats = [f.strip().lower() for f in formats_str.split(",") if f.strip()]
    available = ExporterRegistry.available_formats()
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    return formats


def apply_sheet_overrides(globals_: SheetGlobals, **overrides: float | bool | None) -> SheetGlobals:
    """Replace sheet settings given on the command line.

    Raises:
        ConfigError: If the resulting settings are invalid.
    """
    changes = {name: value for name, value in overrides.items() if value is not None}
    if not changes:
        return globals_
    try:
        return dataclasses.replace(globals_, **changes)
    except ValueError as e:
        raise ConfigError.invalid([ConfigIssue("sheet", str(e))]) from e


def print_summary(output: LayoutOutput) -> None:
    typer.echo(
        f"Laid out {len(output.placed_parts)} parts for {len(output.cases)} cases "
        f"on {output.sheet_count} sheet(s)"
    )
    for summary in output.sheet_summaries():
        typer.echo(
            f"  Sheet {summary.sheet_index + 1}: {summary.part_count} parts, "
            f"{summary.utilization:.1f}% used"
        )


@app.command()
def generate(
    config_file: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to JSON configuration file"),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory for exported sheet files"),
    ] = None,
    output_formats: Annotated[
        str,
        typer.Option("--formats", "-f", help="Comma-separated export formats: svg,dxf (or 'all')"),
    ] = "svg",
    project_name: Annotated[
        str,
        typer.Option("--project-name", help="Project name for output file naming"),
    ] = "booklight",
    sheet_width: Annotated[
        float | None,
        typer.Option("--sheet-width", help="Override sheet width in inches"),
    ] = None,
    sheet_height: Annotated[
        float | None,
        typer.Option("--sheet-height", help="Override sheet height in inches"),
    ] = None,
    margin: Annotated[
        float | None,
        typer.Option("--margin", help="Override sheet margin in inches"),
    ] = None,
    gap: Annotated[
        float | None,
        typer.Option("--gap", help="Override gap between parts in inches"),
    ] = None,
    no_rotation: Annotated[
        bool,
        typer.Option("--no-rotation", help="Do not rotate parts when packing"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Generate case parts from a configuration file and lay them out.

    Example:
        booklight generate --config cases.json --output-dir out --formats all
    """
    configure_logging(verbose)
    formats = parse_formats(output_formats)

    try:
        config = load_config(config_file)
        globals_ = apply_sheet_overrides(
            config_to_globals(config.sheet),
            sheet_w=sheet_width,
            sheet_h=sheet_height,
            margin=margin,
            part_gap=gap,
            allow_rotation=False if no_rotation else None,
        )
        cases = config_to_cases(config)
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)

    try:
        output = GenerateLayoutCommand().execute(cases, globals_)
    except LayoutFailedError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    print_summary(output)

    if output_dir is None:
        return

    manager = ExportManager(output_dir)
    try:
        files = manager.export_all(formats, output, project_name)
    except OSError as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("\nExported files:")
    for fmt, paths in files.items():
        for path in paths:
            typer.echo(f"  {fmt.upper()}: {path}")


if __name__ == "__main__":
    app()

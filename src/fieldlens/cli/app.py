"""fieldlens CLI application entry point.

Provides commands for profiling the fields of tabular files and exporting
their value distributions as inline-load script text.

Usage:
    fieldlens profile <file> [--field NAME ...]
    fieldlens export-script <file> [--delimiter pipe] [--max-rows 100]
    fieldlens version
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console

from fieldlens.config import ConfigError, ProfilingConfig
from fieldlens.models.metadata import DatasetMetadata
from fieldlens.models.profiling import ProfilingResult

app = typer.Typer(
    name="fieldlens",
    help="Column profiling for tabular files: statistics, patterns and data quality.",
    no_args_is_help=True,
)

console = Console()

FieldOption = Annotated[
    list[str] | None,
    typer.Option("--field", "-f", help="Field to profile (repeatable); all fields when omitted"),
]
MaxUniqueOption = Annotated[
    int | None,
    typer.Option("--max-unique", help="Distinct values tracked per distribution", min=1),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="JSON profiling configuration file"),
]
YesOption = Annotated[
    bool,
    typer.Option("--yes", "-y", help="Profile large files without asking"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug logging on stderr"),
]


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _load_config(config_path: Path | None, max_unique: int | None) -> ProfilingConfig:
    config = ProfilingConfig.from_file(config_path) if config_path else ProfilingConfig()
    if max_unique is not None:
        config = ProfilingConfig.model_validate(
            {**config.model_dump(), "max_unique_values": max_unique}
        )
    return config


def _profile_file(
    file: Path,
    fields: list[str] | None,
    config_path: Path | None,
    max_unique: int | None,
    yes: bool,
    out: Console,
) -> tuple[ProfilingResult, DatasetMetadata]:
    """Shared read-and-profile steps; exits with code 1 on any error."""
    from fieldlens.io.readers import DatasetReadError, read_dataset
    from fieldlens.profiling.profiler import profile_fields, should_warn_large_dataset

    try:
        config = _load_config(config_path, max_unique)
    except ConfigError as e:
        out.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    out.print(f"\n[bold blue][1/2][/bold blue] Reading {file.name}...")
    try:
        rows, meta = read_dataset(file)
    except DatasetReadError as e:
        out.print(f"[bold red]Error reading file:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    field_names = fields or meta.column_names
    unknown = [name for name in field_names if name not in meta.column_names]
    if unknown:
        out.print(f"[bold red]Error:[/bold red] Unknown field(s): {', '.join(unknown)}")
        out.print(f"Available fields: {', '.join(meta.column_names)}")
        raise typer.Exit(code=1)

    if should_warn_large_dataset(meta.row_count, config.large_dataset_warning_rows) and not yes:
        out.print(
            f"[yellow]{file.name} has {meta.row_count:,} rows; profiling may take a while.[/yellow]"
        )
        if not typer.confirm("Continue?"):
            raise typer.Exit(code=1)

    out.print(
        f"[bold blue][2/2][/bold blue] Profiling {len(field_names)} fields "
        f"over {meta.row_count:,} rows..."
    )
    result = profile_fields(rows, field_names, config=config)
    if result.error is not None:
        out.print(f"[bold red]Error:[/bold red] {result.error}")
        raise typer.Exit(code=1)
    return result, meta


@app.command()
def version() -> None:
    """Show the current version."""
    from fieldlens import __version__

    console.print(f"fieldlens {__version__}")


@app.command()
def profile(
    file: Annotated[
        Path,
        typer.Argument(help="Data file (.csv, .json, .parquet or .sas7bdat)"),
    ],
    field: FieldOption = None,
    max_unique: MaxUniqueOption = None,
    config: ConfigOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the profiling result as JSON to this file"),
    ] = None,
    detail: Annotated[
        bool,
        typer.Option("--detail", "-d", help="Show statistics for each field"),
    ] = False,
    yes: YesOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Profile the fields of a tabular file.

    Classifies every field as numeric, string or date, computes its
    statistics and quality metrics, and displays a summary table.
    """
    from fieldlens.cli.display import display_field_detail, display_profile_summary
    from fieldlens.export.exporters import export_to_json

    _configure_logging(verbose)
    result, meta = _profile_file(file, field, config, max_unique, yes, console)

    console.print()
    display_profile_summary(result, console, meta)

    if detail:
        for p in result.fields:
            console.print()
            display_field_detail(p, console)

    if output is not None:
        export_to_json(result, output)
        console.print(f"\n[green]Profile written to {output}[/green]")


@app.command(name="export-script")
def export_script(
    file: Annotated[
        Path,
        typer.Argument(help="Data file (.csv, .json, .parquet or .sas7bdat)"),
    ],
    field: FieldOption = None,
    delimiter: Annotated[
        str,
        typer.Option("--delimiter", help="tab, pipe, comma or semicolon"),
    ] = "tab",
    max_rows: Annotated[
        int,
        typer.Option("--max-rows", help="Distribution rows per field; 0 exports all", min=0),
    ] = 0,
    max_unique: MaxUniqueOption = None,
    config: ConfigOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the script to this file instead of stdout"),
    ] = None,
    yes: YesOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Export field value distributions as inline-load script text."""
    from fieldlens.export.exporters import (
        DELIMITERS,
        export_inline_script,
        generate_inline_script,
    )

    _configure_logging(verbose)
    # keep stdout clean when the script itself goes there
    out = console if output is not None else Console(stderr=True)
    if delimiter.lower() not in DELIMITERS:
        out.print(f"[yellow]Unknown delimiter {delimiter!r}; using tab[/yellow]")

    result, meta = _profile_file(file, field, config, max_unique, yes, out)

    if output is None:
        typer.echo(
            generate_inline_script(
                result.fields, meta.filename, delimiter=delimiter, max_rows=max_rows
            ),
            nl=False,
        )
        return

    export_inline_script(
        result.fields, meta.filename, output, delimiter=delimiter, max_rows=max_rows
    )
    console.print(f"\n[green]Script written to {output}[/green]")

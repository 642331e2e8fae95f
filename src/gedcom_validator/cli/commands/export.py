from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedcom_validator.cli.utils import load_and_validate
from gedcom_validator.exporter import export_store_json, serialize_store_to_json_string

console = Console()


def export_command(
    gedcom: Path = typer.Argument(..., help="GEDCOM file to export"),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    now: Optional[str] = typer.Option(
        None,
        "--now",
        help="Reference date used as 'now', e.g. '1 JAN 2020'",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Export individuals, families and findings as JSON (stdout by default).
    """
    result = load_and_validate(gedcom, now=now, verbose=verbose)
    indent = 2 if pretty else None

    if verbose:
        console.log("Exporting JSON")

    if out:
        export_store_json(result.store, out, findings=result.findings, indent=indent)
    else:
        typer.echo(serialize_store_to_json_string(result.store, result.findings, indent=indent))

    if verbose:
        console.log("Export complete")

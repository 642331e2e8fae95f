from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedcom_validator.cli.utils import load_and_validate
from gedcom_validator.config import get_config
from gedcom_validator.reports import ListingSettings, render_report

console = Console()


def validate_command(
    gedcom: Path = typer.Argument(..., help="GEDCOM file to check"),
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
    Print the consistency report. Exits with status 1 if any error is found.
    """
    result = load_and_validate(gedcom, now=now, verbose=verbose)

    render_report(
        result.store,
        result.findings,
        result.now,
        settings=ListingSettings.from_config(get_config()),
        console=console,
    )

    if not result.ok:
        raise typer.Exit(code=1)

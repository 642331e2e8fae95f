from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gedcom_validator.cli.utils import load_lines
from gedcom_validator.loader import trace_lines

console = Console()


def trace_command(
    gedcom: Path = typer.Argument(..., help="GEDCOM file to trace"),
    invalid_only: bool = typer.Option(
        False,
        "--invalid-only",
        help="Only list lines that will be skipped",
    ),
):
    """
    Show how each line is read: level, tag and what the tag means.
    """
    traces = trace_lines(load_lines(gedcom))

    table = Table(title=f"Line trace: {escape(gedcom.name)}")
    table.add_column("Line", justify="right")
    table.add_column("Text")
    table.add_column("Level", justify="right")
    table.add_column("Tag", style="bold")
    table.add_column("Meaning")

    for t in traces:
        if invalid_only and t.valid:
            continue
        table.add_row(
            str(t.lineno),
            escape(t.line),
            "" if t.level is None else str(t.level),
            escape(t.tag) if t.tag else "[red]Invalid tag[/red]",
            t.meaning if t.valid else "",
        )

    console.print(table)

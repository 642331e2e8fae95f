from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from gedcom_validator.config import get_config
from gedcom_validator.core.exceptions import InputFileError
from gedcom_validator.core.pipeline import ValidationResult, resolve_reference_date, validate_lines
from gedcom_validator.dates import GedcomDate
from gedcom_validator.loader.file_locator import read_lines

console = Console()


def reference_date(now: Optional[str]) -> GedcomDate:
    """
    "now" from the --now option, else the configured reference date, else today.
    """
    try:
        return resolve_reference_date(now or get_config().reference_date)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--now") from exc


def load_lines(path: Path) -> list[str]:
    """Read the input file, turning a missing/unreadable file into exit status 1."""
    try:
        return read_lines(str(path))
    except InputFileError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def load_and_validate(path: Path, *, now: Optional[str] = None, verbose: bool = False) -> ValidationResult:
    """
    Full read -> build -> derive -> validate run for one file.
    """
    t0 = time.perf_counter()

    lines = load_lines(path)
    result = validate_lines(
        lines,
        reference_date(now),
        disabled_rules=get_config().disabled_rules,
    )

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Validated {escape(str(path))} in {elapsed:.2f}s")

    return result

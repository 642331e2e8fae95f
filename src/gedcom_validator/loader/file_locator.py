"""
File Locator

Resolves absolute, validated paths to input GEDCOM files and reads them.
"""

import os
from typing import List

from gedcom_validator.core.exceptions import InputFileError
from gedcom_validator.logging import get_logger

log = get_logger(__name__)


def resolve_input_path(path: str | None) -> str | None:
    """
    Convert a user-provided path into an absolute validated file path.

    Returns:
        Absolute path string, or None if no input path was provided.
    """
    if path is None:
        log.debug("No input path provided to resolve_input_path().")
        return None

    abs_path = os.path.abspath(path)
    log.debug(f"Resolving input file: {abs_path}")

    if not os.path.exists(abs_path):
        raise InputFileError(f"Input file not found: {abs_path}")

    if not os.path.isfile(abs_path):
        raise InputFileError(f"Input path is not a file: {abs_path}")

    log.debug(f"Validated input file: {abs_path}")
    return abs_path


def read_lines(path: str) -> List[str]:
    """
    Read every line of the input file, without line terminators.

    Blank lines are kept so list positions match 1-based file line numbers.
    """
    abs_path = resolve_input_path(path)
    if abs_path is None:
        raise InputFileError("No input file given")

    try:
        with open(abs_path, "r", encoding="utf-8", errors="replace") as f:
            lines = f.read().splitlines()
    except OSError as exc:
        raise InputFileError(f"Cannot read input file {abs_path}: {exc}") from exc

    log.info(f"Loaded {len(lines)} lines from {abs_path}")
    return lines

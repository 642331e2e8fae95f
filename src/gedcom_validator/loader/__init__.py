# src/gedcom_validator/loader/__init__.py

"""
Public interface for the line loader.

Intended usage from other parts of the project and tests:

    from gedcom_validator.loader import (
        Record,
        LineTrace,
        TAG_MEANINGS,
        VOCABULARY,
        line_level,
        read_lines,
        tokenize_line,
        tokenize_lines,
        trace_lines,
    )
"""

from __future__ import annotations

from .file_locator import read_lines, resolve_input_path
from .tokenizer import (
    BARE_LEVEL_ZERO_TAGS,
    TAG_MEANINGS,
    VOCABULARY,
    LineTrace,
    Record,
    is_valid_tag,
    line_level,
    tokenize_line,
    tokenize_lines,
    trace_lines,
)

__all__ = [
    "BARE_LEVEL_ZERO_TAGS",
    "TAG_MEANINGS",
    "VOCABULARY",
    "LineTrace",
    "Record",
    "is_valid_tag",
    "line_level",
    "read_lines",
    "resolve_input_path",
    "tokenize_line",
    "tokenize_lines",
    "trace_lines",
]

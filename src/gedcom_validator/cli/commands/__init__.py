"""
CLI command modules for gedcom_validator.

Each command module defines a single Typer-compatible command function.
"""

from gedcom_validator.cli.commands.export import export_command
from gedcom_validator.cli.commands.trace import trace_command
from gedcom_validator.cli.commands.validate import validate_command

__all__ = [
    "export_command",
    "trace_command",
    "validate_command",
]


from __future__ import annotations

import typer

from gedcom_validator.cli.commands.export import export_command
from gedcom_validator.cli.commands.trace import trace_command
from gedcom_validator.cli.commands.validate import validate_command

app = typer.Typer(
    name="gedcom-validate",
    help="GEDCOM consistency checker: dates, ages and family relationships",
    add_completion=False,
)

app.command("validate")(validate_command)
app.command("export")(export_command)
app.command("trace")(trace_command)


def main():
    app()


if __name__ == "__main__":
    main()

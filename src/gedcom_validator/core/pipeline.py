from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from gedcom_validator.core.context import ParseContext
from gedcom_validator.core.exceptions import InputFileError, ParseExecutionError
from gedcom_validator.dates import GedcomDate, parse_date
from gedcom_validator.exporter import export_store_json
from gedcom_validator.loader.file_locator import read_lines
from gedcom_validator.registry.build_store import build_store
from gedcom_validator.registry.derived import compute_derived
from gedcom_validator.registry.entities import EntityStore
from gedcom_validator.validation.engine import run_rules
from gedcom_validator.validation.findings import Finding


@dataclass
class ValidationResult:
    store: EntityStore
    findings: List[Finding] = field(default_factory=list)
    now: Optional[GedcomDate] = None

    @property
    def ok(self) -> bool:
        return not self.findings


def resolve_reference_date(raw: Optional[str]) -> GedcomDate:
    """
    Turn a configured "now" (``D MON YYYY``) into a date; empty means today.

    Raises ValueError for a value that is not a valid calendar date.
    """
    if raw is None or not str(raw).strip():
        return GedcomDate.today()
    parsed = parse_date(str(raw))
    if parsed is None or not parsed.is_valid:
        raise ValueError(f"Invalid reference date: {raw!r} (expected e.g. '1 JAN 2020')")
    return parsed


def validate_lines(
    lines: Sequence[str],
    now: GedcomDate,
    disabled_rules=(),
) -> ValidationResult:
    """Build, derive and validate from in-memory lines."""
    store = compute_derived(build_store(lines), now)
    findings = run_rules(store, now, disabled=disabled_rules)
    return ValidationResult(store=store, findings=findings, now=now)


class Pipeline:
    """
    Orchestrates the validation pipeline.
    No business logic lives here.
    """

    def __init__(self, context: ParseContext):
        self.ctx = context
        self.log = context.logger

    def run(self) -> ValidationResult:
        self.log.info("Pipeline starting")

        try:
            lines = read_lines(self.ctx.input_path)
        except InputFileError as exc:
            self.log.error(str(exc))
            raise

        try:
            now = self.ctx.reference_date or resolve_reference_date(
                getattr(self.ctx.config, "reference_date", None)
            )
            disabled = getattr(self.ctx.config, "disabled_rules", set())

            result = validate_lines(lines, now, disabled_rules=disabled)

            if self.ctx.output_path:
                export_store_json(result.store, self.ctx.output_path, findings=result.findings)

        except Exception as exc:
            self.log.exception("Pipeline execution failed")
            raise ParseExecutionError(str(exc)) from exc

        self.ctx.findings = result.findings
        self.ctx.stats.update(
            lines=len(lines),
            individuals=len(result.store.individuals),
            families=len(result.store.families),
            findings=len(result.findings),
        )
        self.log.info("Pipeline completed: %d finding(s)", len(result.findings))
        return result

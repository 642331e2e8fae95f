from __future__ import annotations

from typing import Container, Dict, List, Optional

from gedcom_validator.dates import GedcomDate
from gedcom_validator.logging import get_logger
from gedcom_validator.registry.entities import EntityStore
from gedcom_validator.validation.findings import Finding
from gedcom_validator.validation.rules import RULES, Rule

log = get_logger(__name__)


def run_rules(
    store: EntityStore,
    now: GedcomDate,
    *,
    rules: Optional[Dict[str, Rule]] = None,
    disabled: Container[str] = (),
) -> List[Finding]:
    """
    Run each rule over the finished store and collect their findings.

    Rules run in catalogue order; findings keep the order each rule emits
    them in, so the same input always gives the same list.
    """
    catalogue = RULES if rules is None else rules
    findings: List[Finding] = []

    for name, check in catalogue.items():
        if name in disabled:
            log.debug("Rule %s disabled", name)
            continue
        produced = check(store, now)
        if produced:
            log.info("Rule %s: %d finding(s)", name, len(produced))
        findings.extend(produced)

    log.info("Validation complete: %d finding(s)", len(findings))
    return findings

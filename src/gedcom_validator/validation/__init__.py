"""
Validation rule engine.

    from gedcom_validator.validation import RULES, Finding, run_rules
"""

from __future__ import annotations

from .engine import run_rules
from .findings import Finding, make_finding
from .rules import RULES, Rule

__all__ = [
    "Finding",
    "RULES",
    "Rule",
    "make_finding",
    "run_rules",
]

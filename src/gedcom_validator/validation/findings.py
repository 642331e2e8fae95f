from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True, order=True)
class Finding:
    """
    One validation failure.

    Attributes:
        rule: Name of the rule that produced it, e.g. "birth-after-death".
        entity_id: Identifier of the offending individual or family.
        lines: Source line numbers involved, ascending.
        message: Human-readable description.
    """
    rule: str
    entity_id: str
    lines: Tuple[int, ...]
    message: str


def make_finding(
    rule: str,
    entity_id: str,
    lines: Iterable[Optional[int]],
    message: str,
) -> Finding:
    """Build a Finding with its line numbers de-duplicated and sorted."""
    cited = tuple(sorted({n for n in lines if n}))
    return Finding(rule=rule, entity_id=entity_id, lines=cited, message=message)

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from gedcom_validator.dates import GedcomDate


@dataclass
class ParseContext:
    """
    Shared pipeline context.
    This object is passed between orchestration layers.
    """

    config: Any
    logger: Any

    input_path: Optional[str] = None
    output_path: Optional[str] = None

    # "now" for ages and future-date checks; None means today
    reference_date: Optional[GedcomDate] = None

    stats: Dict[str, Any] = field(default_factory=dict)
    findings: List[Any] = field(default_factory=list)

    debug: bool = False

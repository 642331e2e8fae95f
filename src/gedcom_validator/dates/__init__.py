"""
Date handling for DATE values (``D MON YYYY``).

    from gedcom_validator.dates import GedcomDate, parse_date, format_date
"""

from __future__ import annotations

from .gedcom_date import MONTHS, GedcomDate, format_date, parse_date

__all__ = [
    "MONTHS",
    "GedcomDate",
    "format_date",
    "parse_date",
]

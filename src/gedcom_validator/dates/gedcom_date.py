# src/gedcom_validator/dates/gedcom_date.py

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional


# ---------------------------------------------------------------------------
# Month helpers
# ---------------------------------------------------------------------------

MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

MONTH_ABBREVIATIONS = {num: abbr for abbr, num in MONTHS.items()}


@dataclass(frozen=True, order=True)
class GedcomDate:
    """
    A "day month-abbrev year" date as written in the file.

    Ordering compares (year, month, day), so calendar-invalid values such as
    31 FEB 2000 still sort and compare; they are never rolled over into a
    neighbouring month. Use ``is_valid`` to tell them apart.
    """

    year: int
    month: int
    day: int

    @property
    def is_valid(self) -> bool:
        if not 1 <= self.month <= 12 or self.year < 1:
            return False
        return 1 <= self.day <= calendar.monthrange(self.year, self.month)[1]

    def to_date(self) -> Optional[date]:
        """Return a ``datetime.date`` or None for calendar-invalid values."""
        if not self.is_valid:
            return None
        return date(self.year, self.month, self.day)

    def years_until(self, end: "GedcomDate") -> int:
        """
        Whole years from this date to ``end``.

        Naive year subtraction, less one when the anniversary has not yet
        been reached by ``end``.
        """
        years = end.year - self.year
        if (end.month, end.day) < (self.month, self.day):
            years -= 1
        return years

    @classmethod
    def from_date(cls, value: date) -> "GedcomDate":
        return cls(year=value.year, month=value.month, day=value.day)

    @classmethod
    def today(cls) -> "GedcomDate":
        return cls.from_date(date.today())

    def __str__(self) -> str:
        month = MONTH_ABBREVIATIONS.get(self.month, str(self.month))
        return f"{self.day} {month} {self.year}"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _parse_year(token: str) -> Optional[int]:
    token = token.strip()
    # allow 1-4 digit years for deep history
    if 1 <= len(token) <= 4 and token.isascii() and token.isdigit():
        return int(token)
    return None


def parse_date(raw: Optional[str]) -> Optional[GedcomDate]:
    """
    Parse a DATE value of the form ``D MON YYYY`` (e.g. ``4 JUL 1776``).

    The month abbreviation is case-insensitive. Returns None for anything
    that does not have exactly that shape; a value with the right shape but
    an impossible day (``31 FEB 2000``) is returned as-is and reports
    ``is_valid == False``.
    """
    if raw is None:
        return None

    tokens = str(raw).split()
    if len(tokens) != 3:
        return None

    day_token, mon_token, year_token = tokens
    if not (day_token.isascii() and day_token.isdigit()) or len(day_token) > 2:
        return None

    mon = MONTHS.get(mon_token.upper())
    year = _parse_year(year_token)
    if mon is None or year is None:
        return None

    return GedcomDate(year=year, month=mon, day=int(day_token))


def format_date(value: Optional[GedcomDate]) -> str:
    """Format a date back to ``D MON YYYY``; empty string for None."""
    if value is None:
        return ""
    return str(value)

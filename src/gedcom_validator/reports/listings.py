"""
Derived listings over a finished store.

Every function is a read-only scan; none of them changes the store. Dates
that are not valid calendar dates are left out of any listing that needs
day arithmetic.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional, Tuple

from gedcom_validator.dates import GedcomDate
from gedcom_validator.registry.entities import EntityStore, Family, Individual


@dataclass(frozen=True)
class ListingSettings:
    recent_days: int = 30
    upcoming_days: int = 30
    single_min_age: int = 30

    @classmethod
    def from_config(cls, cfg: Any) -> "ListingSettings":
        listings = getattr(cfg, "listings", {}) or {}
        return cls(
            recent_days=int(listings.get("recent_days", cls.recent_days)),
            upcoming_days=int(listings.get("upcoming_days", cls.upcoming_days)),
            single_min_age=int(listings.get("single_min_age", cls.single_min_age)),
        )


def _anniversary_in(year: int, month: int, day: int) -> date:
    # 29 FEB falls on 1 MAR in non-leap years
    if month == 2 and day == 29 and not calendar.isleap(year):
        return date(year, 3, 1)
    return date(year, month, day)


def next_anniversary(value: GedcomDate, now: GedcomDate) -> Optional[date]:
    """First anniversary of ``value`` on or after ``now``; None if either is invalid."""
    today = now.to_date()
    if value.to_date() is None or today is None:
        return None
    upcoming = _anniversary_in(today.year, value.month, value.day)
    if upcoming < today:
        upcoming = _anniversary_in(today.year + 1, value.month, value.day)
    return upcoming


def _days_since(value: Optional[GedcomDate], now: GedcomDate) -> Optional[int]:
    if value is None or value.to_date() is None or now.to_date() is None:
        return None
    return (now.to_date() - value.to_date()).days


def _days_until_anniversary(value: Optional[GedcomDate], now: GedcomDate) -> Optional[int]:
    if value is None:
        return None
    upcoming = next_anniversary(value, now)
    if upcoming is None:
        return None
    return (upcoming - now.to_date()).days


# ---------------------------------------------------------------------------
# Individuals
# ---------------------------------------------------------------------------

def individual_ages(store: EntityStore) -> List[Tuple[Individual, Optional[int]]]:
    """Every individual with the age from the derived pass (None = unknown)."""
    return [(ind, ind.age) for ind in store.individuals.values()]


def deceased(store: EntityStore) -> List[Individual]:
    return [ind for ind in store.individuals.values() if ind.death is not None]


def living_married(store: EntityStore) -> List[Individual]:
    """Living individuals who are a spouse in a family not ended by divorce."""
    return [
        ind
        for ind in store.individuals.values()
        if ind.is_alive
        and any(fam.divorce is None for fam in store.spouse_families(ind))
    ]


def living_single(store: EntityStore, min_age: int = 30) -> List[Individual]:
    """Living individuals older than ``min_age`` who were never a spouse."""
    return [
        ind
        for ind in store.individuals.values()
        if ind.is_alive
        and ind.age is not None
        and ind.age > min_age
        and not ind.families_as_spouse
        and not store.spouse_families(ind)
    ]


def recent_births(store: EntityStore, now: GedcomDate, days: int = 30) -> List[Individual]:
    """Individuals born in the last ``days`` days, up to and including ``now``."""
    result = []
    for ind in store.individuals.values():
        since = _days_since(ind.birth_date, now)
        if since is not None and 0 <= since <= days:
            result.append(ind)
    return result


def recent_deaths(store: EntityStore, now: GedcomDate, days: int = 30) -> List[Individual]:
    """Individuals who died in the last ``days`` days, up to and including ``now``."""
    result = []
    for ind in store.individuals.values():
        since = _days_since(ind.death_date, now)
        if since is not None and 0 <= since <= days:
            result.append(ind)
    return result


def upcoming_birthdays(store: EntityStore, now: GedcomDate, days: int = 30) -> List[Individual]:
    """Living individuals whose birthday falls within the next ``days`` days."""
    result = []
    for ind in store.individuals.values():
        if not ind.is_alive:
            continue
        until = _days_until_anniversary(ind.birth_date, now)
        if until is not None and until <= days:
            result.append(ind)
    return result


# ---------------------------------------------------------------------------
# Families
# ---------------------------------------------------------------------------

def upcoming_anniversaries(store: EntityStore, now: GedcomDate, days: int = 30) -> List[Family]:
    """
    Couples still married (no divorce, both spouses on file and living)
    whose wedding anniversary falls within the next ``days`` days.
    """
    result = []
    for fam in store.families.values():
        if fam.divorce is not None:
            continue
        husband, wife = store.husband_of(fam), store.wife_of(fam)
        if husband is None or wife is None or not (husband.is_alive and wife.is_alive):
            continue
        until = _days_until_anniversary(fam.marriage_date, now)
        if until is not None and until <= days:
            result.append(fam)
    return result


def siblings_by_age(store: EntityStore) -> List[Tuple[Family, List[Individual]]]:
    """Each family's children in derived order (oldest first)."""
    return [(fam, store.children_of(fam)) for fam in store.families.values()]


def multiple_births(store: EntityStore) -> List[Tuple[Family, Tuple[str, ...]]]:
    """Each multiple-birth group found by the derived pass."""
    return [
        (fam, group)
        for fam in store.families.values()
        for group in fam.birth_groups
    ]

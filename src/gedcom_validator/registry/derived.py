from __future__ import annotations

from typing import List, Optional, Tuple

from gedcom_validator.dates import GedcomDate
from gedcom_validator.logging import get_logger
from gedcom_validator.registry.entities import EntityStore, Family, Individual, Sourced

log = get_logger(__name__)


def compute_age(ind: Individual, now: GedcomDate) -> Optional[int]:
    """
    Whole years from birth to death, or to ``now`` for the living.

    None when there is no birth date.
    """
    birth = ind.birth_date
    if birth is None:
        return None
    end = ind.death_date or now
    return birth.years_until(end)


def sort_children(store: EntityStore, fam: Family) -> None:
    """
    Reorder ``fam.children`` by birth date, oldest first.

    Children without a birth date (or that do not resolve) go last. The sort
    is stable, so ties keep their file order.
    """
    def key(ref: Sourced[str]) -> Tuple[bool, Tuple[int, int, int]]:
        child = store.get_individual(ref.value)
        birth = child.birth_date if child else None
        if birth is None:
            return True, (0, 0, 0)
        return False, (birth.year, birth.month, birth.day)

    fam.children.sort(key=key)


def find_birth_groups(store: EntityStore, fam: Family) -> List[Tuple[str, ...]]:
    """
    Group consecutive (already sorted) siblings born on the same date.

    Only groups of two or more are returned.
    """
    groups: List[Tuple[str, ...]] = []
    run: List[str] = []
    run_date: Optional[GedcomDate] = None

    for ref in fam.children:
        child = store.get_individual(ref.value)
        birth = child.birth_date if child else None

        if birth is not None and birth == run_date:
            run.append(ref.value)
            continue

        if len(run) > 1:
            groups.append(tuple(run))
        run = [ref.value] if birth is not None else []
        run_date = birth

    if len(run) > 1:
        groups.append(tuple(run))
    return groups


def compute_derived(store: EntityStore, now: GedcomDate) -> EntityStore:
    """
    Fill the derived fields: ages, sibling order and multiple-birth groups.

    Safe to run more than once; every derived field is recomputed from the
    parsed fields.
    """
    for ind in store.individuals.values():
        ind.age = compute_age(ind, now)
        ind.birth_group = ()

    for fam in store.families.values():
        sort_children(store, fam)
        fam.birth_groups = find_birth_groups(store, fam)
        for group in fam.birth_groups:
            for member in group:
                child = store.get_individual(member)
                if child is not None:
                    child.birth_group = group

    log.debug(
        "Derived fields computed for %d individuals, %d families",
        len(store.individuals),
        len(store.families),
    )
    return store

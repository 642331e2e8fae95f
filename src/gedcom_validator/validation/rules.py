"""
Consistency rules.

Every rule has the signature ``rule(store, now) -> List[Finding]``, reads the
store without changing it, and treats references that do not resolve as
"not enough data" for that field.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from gedcom_validator.dates import GedcomDate
from gedcom_validator.registry.entities import (
    EntityStore,
    Individual,
    Sex,
    Sourced,
)
from gedcom_validator.registry.utils import normalize_id
from gedcom_validator.validation.findings import Finding, make_finding

Rule = Callable[[EntityStore, GedcomDate], List[Finding]]

RULES: Dict[str, Rule] = {}

MAX_AGE = 150
MIN_MARRIAGE_AGE = 14
MAX_MULTIPLE_BIRTH = 5


def rule(name: str) -> Callable[[Rule], Rule]:
    """Register a rule in ``RULES`` under ``name`` (catalogue order)."""
    def decorator(func: Rule) -> Rule:
        func.rule_name = name  # type: ignore[attr-defined]
        RULES[name] = func
        return func
    return decorator


def _dated_fields(
    store: EntityStore,
) -> Iterator[Tuple[str, str, Sourced[GedcomDate]]]:
    """Yield (entity id, field label, date) for every stored event date."""
    for ind in store.individuals.values():
        for label, value in (("birth", ind.birth), ("death", ind.death)):
            if value is not None:
                yield ind.identifier, label, value
    for fam in store.families.values():
        for label, value in (("marriage", fam.marriage), ("divorce", fam.divorce)):
            if value is not None:
                yield fam.identifier, label, value


def _lineno(value: Optional[Sourced]) -> Optional[int]:
    return None if value is None else value.lineno


# ---------------------------------------------------------------------------
# Individual rules
# ---------------------------------------------------------------------------

@rule("age-over-150")
def check_age_limit(store: EntityStore, now: GedcomDate) -> List[Finding]:
    findings = []
    for ind in store.individuals.values():
        if ind.birth is None:
            continue
        age = ind.birth.value.years_until(ind.death_date or now)
        if age >= MAX_AGE:
            state = "at death" if ind.death else "and still living"
            findings.append(make_finding(
                "age-over-150",
                ind.identifier,
                [ind.birth.lineno, _lineno(ind.death)],
                f"{ind.identifier} is {age} years old {state} (limit {MAX_AGE})",
            ))
    return findings


@rule("dates-after-now")
def check_dates_after_now(store: EntityStore, now: GedcomDate) -> List[Finding]:
    return [
        make_finding(
            "dates-after-now",
            entity_id,
            [value.lineno],
            f"{entity_id} {label} date {value.value} is after the current date {now}",
        )
        for entity_id, label, value in _dated_fields(store)
        if value.value > now
    ]


@rule("invalid-dates")
def check_invalid_dates(store: EntityStore, now: GedcomDate) -> List[Finding]:
    return [
        make_finding(
            "invalid-dates",
            entity_id,
            [value.lineno],
            f"{entity_id} {label} date {value.value} is not a calendar date",
        )
        for entity_id, label, value in _dated_fields(store)
        if not value.value.is_valid
    ]


@rule("birth-after-death")
def check_birth_before_death(store: EntityStore, now: GedcomDate) -> List[Finding]:
    findings = []
    for ind in store.individuals.values():
        if ind.birth is None or ind.death is None:
            continue
        if ind.birth.value > ind.death.value:
            findings.append(make_finding(
                "birth-after-death",
                ind.identifier,
                [ind.birth.lineno, ind.death.lineno],
                f"{ind.identifier} born {ind.birth.value} after death {ind.death.value}",
            ))
    return findings


@rule("unique-name-and-birth")
def check_unique_name_and_birth(store: EntityStore, now: GedcomDate) -> List[Finding]:
    groups: Dict[Tuple[str, GedcomDate], List[Individual]] = defaultdict(list)
    for ind in store.individuals.values():
        if ind.name is None or ind.birth is None:
            continue
        groups[(ind.name.value, ind.birth.value)].append(ind)

    findings = []
    for (name, birth), members in groups.items():
        if len(members) < 2:
            continue
        ids = ", ".join(m.identifier for m in members)
        findings.append(make_finding(
            "unique-name-and-birth",
            members[0].identifier,
            [m.lineno for m in members],
            f"Individuals {ids} share name {name!r} and birth date {birth}",
        ))
    return findings


# ---------------------------------------------------------------------------
# Family rules
# ---------------------------------------------------------------------------

@rule("spouse-gender")
def check_spouse_gender(store: EntityStore, now: GedcomDate) -> List[Finding]:
    expected = {"husband": Sex.MALE, "wife": Sex.FEMALE}
    findings = []
    for fam in store.families.values():
        for role, ref, spouse in store.spouses_of(fam):
            if spouse.sex is None or spouse.sex.value is expected[role]:
                continue
            findings.append(make_finding(
                "spouse-gender",
                fam.identifier,
                [ref.lineno],
                f"{fam.identifier} {role} {spouse.identifier} has sex "
                f"{spouse.sex.value.value}, expected {expected[role].value}",
            ))
    return findings


@rule("marriage-before-14")
def check_marriage_age(store: EntityStore, now: GedcomDate) -> List[Finding]:
    findings = []
    for fam in store.families.values():
        if fam.marriage is None:
            continue
        for role, _ref, spouse in store.spouses_of(fam):
            if spouse.birth is None:
                continue
            age = spouse.birth.value.years_until(fam.marriage.value)
            if age < MIN_MARRIAGE_AGE:
                findings.append(make_finding(
                    "marriage-before-14",
                    fam.identifier,
                    [spouse.birth.lineno, fam.marriage.lineno],
                    f"{fam.identifier} {role} {spouse.identifier} married "
                    f"{fam.marriage.value} at age {age}, under {MIN_MARRIAGE_AGE}",
                ))
    return findings


@rule("marriage-after-death")
def check_marriage_before_death(store: EntityStore, now: GedcomDate) -> List[Finding]:
    findings = []
    for fam in store.families.values():
        if fam.marriage is None:
            continue
        for role, _ref, spouse in store.spouses_of(fam):
            if spouse.death is None:
                continue
            if fam.marriage.value > spouse.death.value:
                findings.append(make_finding(
                    "marriage-after-death",
                    fam.identifier,
                    [spouse.death.lineno, fam.marriage.lineno],
                    f"{fam.identifier} married {fam.marriage.value} after {role} "
                    f"{spouse.identifier} died {spouse.death.value}",
                ))
    return findings


@rule("birth-after-marriage")
def check_birth_before_marriage(store: EntityStore, now: GedcomDate) -> List[Finding]:
    findings = []
    for fam in store.families.values():
        if fam.marriage is None:
            continue
        for role, _ref, spouse in store.spouses_of(fam):
            if spouse.birth is None:
                continue
            if spouse.birth.value > fam.marriage.value:
                findings.append(make_finding(
                    "birth-after-marriage",
                    fam.identifier,
                    [spouse.birth.lineno, fam.marriage.lineno],
                    f"{fam.identifier} {role} {spouse.identifier} born "
                    f"{spouse.birth.value} after marriage {fam.marriage.value}",
                ))
    return findings


@rule("divorce-before-marriage")
def check_divorce_before_marriage(store: EntityStore, now: GedcomDate) -> List[Finding]:
    findings = []
    for fam in store.families.values():
        if fam.marriage is None or fam.divorce is None:
            continue
        if fam.divorce.value < fam.marriage.value:
            findings.append(make_finding(
                "divorce-before-marriage",
                fam.identifier,
                [fam.marriage.lineno, fam.divorce.lineno],
                f"{fam.identifier} divorced {fam.divorce.value} before marriage "
                f"{fam.marriage.value}",
            ))
    return findings


@rule("death-before-divorce")
def check_death_before_divorce(store: EntityStore, now: GedcomDate) -> List[Finding]:
    findings = []
    for fam in store.families.values():
        if fam.divorce is None:
            continue
        for role, _ref, spouse in store.spouses_of(fam):
            if spouse.death is None:
                continue
            if spouse.death.value < fam.divorce.value:
                findings.append(make_finding(
                    "death-before-divorce",
                    fam.identifier,
                    [spouse.death.lineno, fam.divorce.lineno],
                    f"{fam.identifier} {role} {spouse.identifier} died "
                    f"{spouse.death.value} before divorce {fam.divorce.value}",
                ))
    return findings


@rule("multiple-births")
def check_multiple_births(store: EntityStore, now: GedcomDate) -> List[Finding]:
    """
    No more than five siblings may share a birth date.

    Counts siblings directly rather than trusting ``Family.birth_groups`` so
    the rule also holds on stores that skipped the derived pass.
    """
    findings = []
    for fam in store.families.values():
        by_date: Dict[GedcomDate, List[Individual]] = defaultdict(list)
        for child in store.children_of(fam):
            if child.birth is not None:
                by_date[child.birth.value].append(child)
        for birth, siblings in by_date.items():
            if len(siblings) > MAX_MULTIPLE_BIRTH:
                findings.append(make_finding(
                    "multiple-births",
                    fam.identifier,
                    [s.birth.lineno for s in siblings],
                    f"{fam.identifier} has {len(siblings)} children born {birth} "
                    f"(more than {MAX_MULTIPLE_BIRTH})",
                ))
    return findings


# ---------------------------------------------------------------------------
# Store-wide rules
# ---------------------------------------------------------------------------

def _id_collisions(kind: str, entities) -> List[Finding]:
    groups: Dict[str, List] = defaultdict(list)
    for entity in entities:
        groups[normalize_id(entity.original_id) or entity.original_id].append(entity)

    findings = []
    for normalized, members in groups.items():
        if len(members) < 2:
            continue
        findings.append(make_finding(
            "unique-ids",
            members[0].identifier,
            [m.lineno for m in members],
            f"{kind} id {normalized} is used by {len(members)} records",
        ))
    return findings


@rule("unique-ids")
def check_unique_ids(store: EntityStore, now: GedcomDate) -> List[Finding]:
    """Individuals and families are checked separately; an INDI may share a FAM's id."""
    return (
        _id_collisions("Individual", store.individuals.values())
        + _id_collisions("Family", store.families.values())
    )


@rule("dangling-references")
def check_references(store: EntityStore, now: GedcomDate) -> List[Finding]:
    findings = []

    def missing(owner: str, label: str, ref: Sourced[str], target: str) -> Finding:
        return make_finding(
            "dangling-references",
            owner,
            [ref.lineno],
            f"{owner} {label} {ref.value} does not match any {target}",
        )

    for fam in store.families.values():
        for label, ref in (("husband", fam.husband), ("wife", fam.wife)):
            if ref is not None and store.get_individual(ref.value) is None:
                findings.append(missing(fam.identifier, label, ref, "individual"))
        for ref in fam.children:
            if store.get_individual(ref.value) is None:
                findings.append(missing(fam.identifier, "child", ref, "individual"))

    for ind in store.individuals.values():
        for label, links in (
            ("child of family", ind.families_as_child),
            ("spouse in family", ind.families_as_spouse),
        ):
            for ref in links:
                if store.get_family(ref.value) is None:
                    findings.append(missing(ind.identifier, label, ref, "family"))

    return findings


__all__ = [
    "MAX_AGE",
    "MAX_MULTIPLE_BIRTH",
    "MIN_MARRIAGE_AGE",
    "RULES",
    "Rule",
    "check_age_limit",
    "check_birth_before_death",
    "check_birth_before_marriage",
    "check_dates_after_now",
    "check_death_before_divorce",
    "check_divorce_before_marriage",
    "check_invalid_dates",
    "check_marriage_age",
    "check_marriage_before_death",
    "check_multiple_births",
    "check_references",
    "check_spouse_gender",
    "check_unique_ids",
    "check_unique_name_and_birth",
    "rule",
]

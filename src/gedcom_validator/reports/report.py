from __future__ import annotations

from typing import Iterable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gedcom_validator.dates import GedcomDate, format_date
from gedcom_validator.registry.entities import EntityStore, Family, Individual, value_of
from gedcom_validator.reports import listings
from gedcom_validator.reports.listings import ListingSettings
from gedcom_validator.validation.findings import Finding


def _age_text(age: Optional[int]) -> str:
    return "?" if age is None else str(age)


def _add_row(table: Table, *cells: str) -> None:
    # cells carry file text (names, IDs, messages); never read them as markup
    table.add_row(*(escape(cell) for cell in cells))


def _links(values) -> str:
    return ", ".join(v.value for v in values) or "NA"


def individuals_table(store: EntityStore) -> Table:
    table = Table(title=f"Individuals ({len(store.individuals)})")
    for col in ("ID", "Name", "Sex", "Birthday", "Age", "Alive", "Death", "Child", "Spouse"):
        table.add_column(col)

    for ind in store.individuals.values():
        sex = value_of(ind.sex)
        _add_row(
            table,
            ind.identifier,
            ind.display_name,
            sex.value if sex else "",
            format_date(ind.birth_date),
            _age_text(ind.age),
            str(ind.is_alive),
            format_date(ind.death_date) or "NA",
            _links(ind.families_as_child),
            _links(ind.families_as_spouse),
        )
    return table


def families_table(store: EntityStore) -> Table:
    table = Table(title=f"Families ({len(store.families)})")
    for col in ("ID", "Married", "Divorced", "Husband ID", "Husband Name",
                "Wife ID", "Wife Name", "Children"):
        table.add_column(col)

    for fam in store.families.values():
        husband, wife = store.husband_of(fam), store.wife_of(fam)
        _add_row(
            table,
            fam.identifier,
            format_date(fam.marriage_date),
            format_date(fam.divorce_date) or "NA",
            value_of(fam.husband) or "",
            husband.display_name if husband else "",
            value_of(fam.wife) or "",
            wife.display_name if wife else "",
            ", ".join(fam.child_ids) or "NA",
        )
    return table


def _people_table(title: str, people: Iterable[Individual]) -> Table:
    table = Table(title=title)
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Birthday")
    table.add_column("Age", justify="right")
    for ind in people:
        _add_row(table, ind.identifier, ind.display_name, format_date(ind.birth_date), _age_text(ind.age))
    return table


def _families_listing(title: str, families: Iterable[Family], store: EntityStore) -> Table:
    table = Table(title=title)
    table.add_column("ID")
    table.add_column("Married")
    table.add_column("Couple")
    for fam in families:
        names = [p.display_name for p in (store.husband_of(fam), store.wife_of(fam)) if p]
        _add_row(table, fam.identifier, format_date(fam.marriage_date), " & ".join(names))
    return table


def _siblings_table(store: EntityStore) -> Table:
    table = Table(title="Children by age")
    table.add_column("Family")
    table.add_column("Children (oldest first)")
    for fam, children in listings.siblings_by_age(store):
        if children:
            _add_row(table, fam.identifier, ", ".join(f"{c.identifier} ({_age_text(c.age)})" for c in children))
    return table


def _multiple_births_table(store: EntityStore) -> Table:
    table = Table(title="Multiple births")
    table.add_column("Family")
    table.add_column("Siblings")
    for fam, group in listings.multiple_births(store):
        _add_row(table, fam.identifier, ", ".join(group))
    return table


def findings_table(findings: List[Finding]) -> Table:
    table = Table(title="Errors")
    table.add_column("Rule", style="bold")
    table.add_column("Entity")
    table.add_column("Lines")
    table.add_column("Message")
    for finding in findings:
        _add_row(
            table,
            finding.rule,
            finding.entity_id,
            ", ".join(str(n) for n in finding.lines),
            finding.message,
        )
    return table


def render_report(
    store: EntityStore,
    findings: List[Finding],
    now: GedcomDate,
    settings: Optional[ListingSettings] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Print the full report: entity tables, derived listings, findings and
    the total error count.
    """
    settings = settings or ListingSettings()
    console = console or Console()

    console.print(f"Report date: {now}")
    console.print(individuals_table(store))
    console.print(families_table(store))

    console.print(_people_table("Deceased", listings.deceased(store)))
    console.print(_people_table("Living married", listings.living_married(store)))
    console.print(_people_table(
        f"Living single (over {settings.single_min_age})",
        listings.living_single(store, settings.single_min_age),
    ))
    console.print(_people_table(
        f"Births in the last {settings.recent_days} days",
        listings.recent_births(store, now, settings.recent_days),
    ))
    console.print(_people_table(
        f"Deaths in the last {settings.recent_days} days",
        listings.recent_deaths(store, now, settings.recent_days),
    ))
    console.print(_people_table(
        f"Birthdays in the next {settings.upcoming_days} days",
        listings.upcoming_birthdays(store, now, settings.upcoming_days),
    ))
    console.print(_families_listing(
        f"Anniversaries in the next {settings.upcoming_days} days",
        listings.upcoming_anniversaries(store, now, settings.upcoming_days),
        store,
    ))
    console.print(_siblings_table(store))
    console.print(_multiple_births_table(store))

    if findings:
        console.print(findings_table(findings))
    style = "green" if not findings else "red"
    console.print(f"[{style}]Total errors: {len(findings)}[/{style}]")

from gedcom_validator.dates import GedcomDate, parse_date
from gedcom_validator.registry.entities import EntityStore, Family, Individual, Sex, Sourced
from gedcom_validator.validation import RULES, run_rules
from gedcom_validator.validation.rules import (
    check_age_limit,
    check_birth_before_death,
    check_birth_before_marriage,
    check_dates_after_now,
    check_death_before_divorce,
    check_divorce_before_marriage,
    check_invalid_dates,
    check_marriage_age,
    check_marriage_before_death,
    check_multiple_births,
    check_references,
    check_spouse_gender,
    check_unique_ids,
    check_unique_name_and_birth,
)


def dated(raw, lineno):
    return Sourced(parse_date(raw), lineno)


def indi(identifier, *, name=None, sex=None, birt=None, deat=None, lineno=0, original_id=None):
    return Individual(
        identifier=identifier,
        original_id=original_id or identifier,
        lineno=lineno,
        name=Sourced(name, lineno + 1) if name else None,
        sex=Sourced(Sex.parse(sex), lineno + 2) if sex else None,
        birth=dated(*birt) if birt else None,
        death=dated(*deat) if deat else None,
    )


def fam(identifier="@F1@", *, husb=None, wife=None, marr=None, div=None, children=(), lineno=0, original_id=None):
    return Family(
        identifier=identifier,
        original_id=original_id or identifier,
        lineno=lineno,
        husband=Sourced(husb, 50) if husb else None,
        wife=Sourced(wife, 51) if wife else None,
        children=[Sourced(c, 60 + n) for n, c in enumerate(children)],
        marriage=dated(*marr) if marr else None,
        divorce=dated(*div) if div else None,
    )


def store_of(*entities):
    store = EntityStore()
    for entity in entities:
        if isinstance(entity, Individual):
            store.register_individual(entity)
        else:
            store.register_family(entity)
    return store


# ---------------------------------------------------------------------------
# Divorce before marriage
# ---------------------------------------------------------------------------

def test_divorce_before_marriage_is_reported(now):
    store = store_of(fam(marr=("16 MAR 1999", 1), div=("12 MAR 1999", 2)))
    findings = check_divorce_before_marriage(store, now)
    assert len(findings) == 1
    assert findings[0].lines == (1, 2)
    assert findings[0].entity_id == "@F1@"


def test_divorce_without_marriage_is_fine(now):
    store = store_of(fam(div=("16 MAR 1999", 0)))
    assert check_divorce_before_marriage(store, now) == []


def test_marriage_before_divorce_is_fine(now):
    store = store_of(fam(marr=("10 MAR 1999", 1), div=("12 MAR 1999", 2)))
    assert check_divorce_before_marriage(store, now) == []


def test_no_divorce_is_fine(now):
    store = store_of(fam(marr=("10 MAR 1999", 1)))
    assert check_divorce_before_marriage(store, now) == []


# ---------------------------------------------------------------------------
# Death before divorce
# ---------------------------------------------------------------------------

def test_one_death_before_divorce(now):
    store = store_of(
        indi("@I1@", deat=("10 MAR 1999", 3)),
        indi("@I2@"),
        fam(husb="@I1@", wife="@I2@", div=("12 MAR 1999", 4)),
    )
    assert len(check_death_before_divorce(store, now)) == 1


def test_two_deaths_before_divorce(now):
    store = store_of(
        indi("@I1@", deat=("10 MAR 1999", 3)),
        indi("@I2@", deat=("11 MAR 1999", 4)),
        fam(husb="@I1@", wife="@I2@", div=("12 MAR 1999", 5)),
    )
    findings = check_death_before_divorce(store, now)
    assert len(findings) == 2
    assert {f.lines for f in findings} == {(3, 5), (4, 5)}


def test_no_death_or_no_divorce_is_fine(now):
    no_death = store_of(
        indi("@I1@"), indi("@I2@"),
        fam(husb="@I1@", wife="@I2@", div=("12 MAR 1999", 5)),
    )
    no_divorce = store_of(
        indi("@I1@", deat=("10 MAR 1999", 3)),
        indi("@I2@", deat=("11 MAR 1999", 4)),
        fam(husb="@I1@", wife="@I2@"),
    )
    assert check_death_before_divorce(no_death, now) == []
    assert check_death_before_divorce(no_divorce, now) == []


def test_divorce_before_deaths_is_fine(now):
    store = store_of(
        indi("@I1@", deat=("14 MAR 1999", 3)),
        indi("@I2@", deat=("15 MAR 1999", 4)),
        fam(husb="@I1@", wife="@I2@", div=("12 MAR 1999", 5)),
    )
    assert check_death_before_divorce(store, now) == []


def test_dangling_spouse_is_skipped(now):
    store = store_of(fam(husb="@I404@", wife="@I405@", marr=("1 JAN 2000", 1), div=("1 JAN 2001", 2)))
    assert check_death_before_divorce(store, now) == []
    assert check_marriage_before_death(store, now) == []
    assert check_spouse_gender(store, now) == []


# ---------------------------------------------------------------------------
# Unique ids / unique name + birth
# ---------------------------------------------------------------------------

def test_shared_individual_id():
    store = store_of(
        indi("@I1@", lineno=1),
        indi("@I1@1", original_id="@I1@", lineno=2),
    )
    findings = check_unique_ids(store, None)
    assert len(findings) == 1
    assert findings[0].lines == (1, 2)


def test_shared_family_id():
    store = store_of(
        fam("@F1@", lineno=1),
        fam("@F1@1", original_id="@F1@", lineno=2),
    )
    assert len(check_unique_ids(store, None)) == 1


def test_ids_collide_after_normalization():
    store = store_of(indi("@I1@", lineno=1), indi("@i1@", lineno=2))
    assert len(check_unique_ids(store, None)) == 1


def test_individual_and_family_may_share_an_id():
    store = store_of(indi("@1@", lineno=1), fam("@1@", lineno=2))
    assert check_unique_ids(store, None) == []


def test_unique_ids_are_fine():
    store = store_of(
        indi("@I1@", lineno=1), indi("@I2@", lineno=2),
        fam("@F1@", lineno=3), fam("@F2@", lineno=4),
    )
    assert check_unique_ids(store, None) == []


def test_shared_name_and_birth(now):
    store = store_of(
        indi("@I1@", name="John Smith", birt=("16 MAR 1999", 3), lineno=1),
        indi("@I2@", name="John Smith", birt=("16 MAR 1999", 9), lineno=7),
    )
    assert len(check_unique_name_and_birth(store, now)) == 1


def test_same_birth_or_same_name_only_is_fine(now):
    same_birth = store_of(
        indi("@I1@", name="Joe Smith", birt=("16 MAR 1999", 3)),
        indi("@I2@", name="John Smith", birt=("16 MAR 1999", 9)),
    )
    same_name = store_of(
        indi("@I1@", name="John Smith", birt=("15 MAR 1999", 3)),
        indi("@I2@", name="John Smith", birt=("16 MAR 1999", 9)),
    )
    assert check_unique_name_and_birth(same_birth, now) == []
    assert check_unique_name_and_birth(same_name, now) == []


# ---------------------------------------------------------------------------
# Individual date rules
# ---------------------------------------------------------------------------

def test_age_over_150(now):
    store = store_of(
        indi("@I1@", birt=("1 JAN 1850", 3)),
        indi("@I2@", birt=("1 JAN 1700", 4), deat=("1 JAN 1860", 5)),
        indi("@I3@", birt=("2 JAN 1870", 6)),
        indi("@I4@"),
    )
    findings = check_age_limit(store, now)
    assert [(f.entity_id, f.lines) for f in findings] == [("@I1@", (3,)), ("@I2@", (4, 5))]


def test_dates_after_now(now):
    store = store_of(
        indi("@I1@", birt=("2 JAN 2020", 3), deat=("1 JAN 2020", 4)),
        fam(marr=("1 FEB 2030", 7), div=("1 MAR 2030", 8)),
    )
    findings = check_dates_after_now(store, now)
    assert [f.lines for f in findings] == [(3,), (7,), (8,)]


def test_invalid_dates(now):
    store = store_of(
        indi("@I1@", birt=("31 FEB 2000", 3), deat=("1 JAN 2001", 4)),
        fam(marr=("31 APR 1990", 7)),
    )
    findings = check_invalid_dates(store, now)
    assert [(f.entity_id, f.lines) for f in findings] == [("@I1@", (3,)), ("@F1@", (7,))]


def test_birth_after_death(now):
    store = store_of(
        indi("@I1@", birt=("2 JAN 2000", 3), deat=("1 JAN 2000", 5)),
        indi("@I2@", birt=("1 JAN 2000", 6), deat=("1 JAN 2000", 7)),
    )
    findings = check_birth_before_death(store, now)
    assert len(findings) == 1
    assert findings[0].lines == (3, 5)


# ---------------------------------------------------------------------------
# Family rules
# ---------------------------------------------------------------------------

def test_spouse_gender(now):
    store = store_of(
        indi("@I1@", sex="F"),
        indi("@I2@", sex="M"),
        fam(husb="@I1@", wife="@I2@"),
        indi("@I3@"),  # no SEX line: not checked
        fam("@F2@", husb="@I3@"),
    )
    findings = check_spouse_gender(store, now)
    assert len(findings) == 2
    assert [f.lines for f in findings] == [(50,), (51,)]


def test_marriage_before_14(now):
    store = store_of(
        indi("@I1@", birt=("1 JAN 1980", 3)),
        indi("@I2@", birt=("2 MAR 1986", 20)),
        fam(husb="@I1@", wife="@I2@", marr=("1 MAR 2000", 10)),
    )
    findings = check_marriage_age(store, now)
    assert len(findings) == 1
    assert findings[0].lines == (10, 20)


def test_marriage_after_death(now):
    store = store_of(
        indi("@I1@", deat=("1 JAN 1999", 3)),
        indi("@I2@", deat=("1 JAN 2010", 4)),
        fam(husb="@I1@", wife="@I2@", marr=("1 JUN 1999", 10)),
    )
    findings = check_marriage_before_death(store, now)
    assert len(findings) == 1
    assert findings[0].lines == (3, 10)


def test_birth_after_marriage(now):
    store = store_of(
        indi("@I1@", birt=("1 JAN 2001", 3)),
        indi("@I2@", birt=("1 JAN 2002", 4)),
        fam(husb="@I1@", wife="@I2@", marr=("1 JUN 1999", 10)),
    )
    assert len(check_birth_before_marriage(store, now)) == 2


def test_clean_marriage_window_has_no_marriage_findings(now):
    store = store_of(
        indi("@I1@", sex="M", birt=("1 JAN 1950", 3), deat=("1 JAN 2010", 4)),
        indi("@I2@", sex="F", birt=("1 JAN 1952", 5), deat=("1 JAN 2015", 6)),
        fam(husb="@I1@", wife="@I2@", marr=("1 JUN 1975", 10)),
    )
    for check in (check_marriage_age, check_marriage_before_death, check_birth_before_marriage):
        assert check(store, now) == []


def test_multiple_births(now):
    kids = [indi(f"@I{n}@", birt=("1 MAY 2000", n)) for n in range(1, 7)]
    store = store_of(*kids, fam(children=[k.identifier for k in kids]))
    findings = check_multiple_births(store, now)
    assert len(findings) == 1
    assert findings[0].lines == (1, 2, 3, 4, 5, 6)

    five = store_of(*kids[:5], fam(children=[k.identifier for k in kids[:5]]))
    assert check_multiple_births(five, now) == []


def test_dangling_references(now):
    store = store_of(
        indi("@I1@"),
        fam(husb="@I1@", wife="@I404@", children=["@I405@"]),
    )
    store.get_individual("@I1@").families_as_spouse.append(Sourced("@F9@", 7))
    findings = check_references(store, now)
    assert [(f.entity_id, f.lines) for f in findings] == [
        ("@F1@", (51,)),
        ("@F1@", (60,)),
        ("@I1@", (7,)),
    ]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def test_run_rules_covers_catalogue_and_respects_disabled(now):
    store = store_of(
        indi("@I1@", birt=("2 JAN 2000", 3), deat=("1 JAN 2000", 5)),
        fam(husb="@I404@"),
    )
    findings = run_rules(store, now)
    assert {f.rule for f in findings} == {"birth-after-death", "dangling-references"}

    quiet = run_rules(store, now, disabled={"dangling-references"})
    assert [f.rule for f in quiet] == ["birth-after-death"]


def test_rules_do_not_mutate_store(now):
    store = store_of(
        indi("@I1@", sex="F", birt=("1 JAN 1990", 3)),
        fam(husb="@I1@", marr=("1 JAN 1995", 4)),
    )
    before = repr(store)
    run_rules(store, now)
    assert repr(store) == before


def test_catalogue_names():
    assert set(RULES) == {
        "age-over-150",
        "dates-after-now",
        "invalid-dates",
        "birth-after-death",
        "unique-name-and-birth",
        "spouse-gender",
        "marriage-before-14",
        "marriage-after-death",
        "birth-after-marriage",
        "divorce-before-marriage",
        "death-before-divorce",
        "multiple-births",
        "unique-ids",
        "dangling-references",
    }


def test_empty_store_has_no_findings():
    assert run_rules(EntityStore(), GedcomDate(2020, 1, 1)) == []

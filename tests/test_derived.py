from gedcom_validator.dates import GedcomDate
from gedcom_validator.registry.build_store import build_store
from gedcom_validator.registry.derived import compute_age, compute_derived
from gedcom_validator.registry.entities import EntityStore, Family, Individual, Sourced


def person(identifier, birth=None, death=None):
    return Individual(
        identifier=identifier,
        original_id=identifier,
        birth=Sourced(birth, 1) if birth else None,
        death=Sourced(death, 2) if death else None,
    )


def family_with(children, *people):
    store = EntityStore()
    for p in people:
        store.register_individual(p)
    store.register_family(
        Family(
            identifier="@F1@",
            original_id="@F1@",
            children=[Sourced(c, n) for n, c in enumerate(children, start=10)],
        )
    )
    return store


def test_age_at_reference_date(now):
    assert compute_age(person("@I1@", GedcomDate(2000, 1, 1)), now) == 20
    assert compute_age(person("@I2@", GedcomDate(2000, 1, 2)), now) == 19


def test_age_uses_death_date(now):
    ind = person("@I1@", GedcomDate(1900, 6, 15), GedcomDate(1950, 6, 14))
    assert compute_age(ind, now) == 49


def test_age_unknown_without_birth(now):
    assert compute_age(person("@I1@"), now) is None


def test_siblings_sorted_by_birth_unknown_last(now):
    store = family_with(
        ["@I3@", "@IX@", "@I1@", "@I9@", "@I2@"],
        person("@I1@", GedcomDate(1990, 1, 1)),
        person("@I2@", GedcomDate(1991, 1, 1)),
        person("@I3@", GedcomDate(1992, 1, 1)),
        person("@IX@"),
    )
    compute_derived(store, now)

    # @IX@ has no birth date, @I9@ does not exist; both keep their order at the end
    assert store.get_family("@F1@").child_ids == ["@I1@", "@I2@", "@I3@", "@IX@", "@I9@"]


def test_siblings_with_same_birth_keep_file_order(now):
    twin = GedcomDate(1990, 5, 5)
    store = family_with(
        ["@I2@", "@I1@", "@I0@"],
        person("@I0@", GedcomDate(1980, 1, 1)),
        person("@I1@", twin),
        person("@I2@", twin),
    )
    compute_derived(store, now)

    fam = store.get_family("@F1@")
    assert fam.child_ids == ["@I0@", "@I2@", "@I1@"]
    assert fam.birth_groups == [("@I2@", "@I1@")]
    assert store.get_individual("@I1@").birth_group == ("@I2@", "@I1@")
    assert store.get_individual("@I0@").birth_group == ()


def test_unknown_births_are_never_grouped(now):
    store = family_with(["@I1@", "@I2@"], person("@I1@"), person("@I2@"))
    compute_derived(store, now)
    assert store.get_family("@F1@").birth_groups == []


def test_derived_pass_is_idempotent(now):
    lines = [
        "0 @I1@ INDI", "1 BIRT", "2 DATE 3 MAR 1990",
        "0 @I2@ INDI", "1 BIRT", "2 DATE 3 MAR 1990",
        "0 @I3@ INDI", "1 BIRT", "2 DATE 1 JAN 1980",
        "0 @F1@ FAM", "1 CHIL @I1@", "1 CHIL @I2@", "1 CHIL @I3@",
    ]
    once = compute_derived(build_store(lines), now)
    twice = compute_derived(compute_derived(build_store(lines), now), now)

    assert once == twice
    assert once.get_family("@F1@").child_ids == ["@I3@", "@I1@", "@I2@"]
    assert once.get_individual("@I3@").age == 40

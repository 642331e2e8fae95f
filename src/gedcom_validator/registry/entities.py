from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from gedcom_validator.dates import GedcomDate


T = TypeVar("T")


# -----------------------------
# Base records (small atoms)
# -----------------------------

class Sex(str, Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Sex":
        token = (value or "").strip().upper()
        if token == "M":
            return cls.MALE
        if token == "F":
            return cls.FEMALE
        return cls.UNKNOWN


@dataclass(frozen=True)
class Sourced(Generic[T]):
    """
    A field value together with the 1-based input line it was read from.
    """
    value: T
    lineno: int


def value_of(field_value: Optional[Sourced[T]]) -> Optional[T]:
    """Unwrap an optional Sourced field."""
    return None if field_value is None else field_value.value


# -----------------------------
# Entities
# -----------------------------

@dataclass(slots=True)
class Individual:
    identifier: str
    original_id: str
    lineno: int = 0

    # Modeled
    name: Optional[Sourced[str]] = None
    sex: Optional[Sourced[Sex]] = None
    birth: Optional[Sourced[GedcomDate]] = None
    death: Optional[Sourced[GedcomDate]] = None

    # Pointers captured during build
    families_as_child: List[Sourced[str]] = field(default_factory=list)   # FAMC
    families_as_spouse: List[Sourced[str]] = field(default_factory=list)  # FAMS

    # Level-1 tags with no typed slot on an individual (e.g. HUSB)
    attributes: Dict[str, Sourced[str]] = field(default_factory=dict)

    # Derived pass
    age: Optional[int] = None
    birth_group: Tuple[str, ...] = ()

    @property
    def birth_date(self) -> Optional[GedcomDate]:
        return value_of(self.birth)

    @property
    def death_date(self) -> Optional[GedcomDate]:
        return value_of(self.death)

    @property
    def is_alive(self) -> bool:
        return self.death is None

    @property
    def display_name(self) -> str:
        return self.name.value if self.name else ""


@dataclass(slots=True)
class Family:
    identifier: str
    original_id: str
    lineno: int = 0

    # Pointers captured during build
    husband: Optional[Sourced[str]] = None
    wife: Optional[Sourced[str]] = None
    children: List[Sourced[str]] = field(default_factory=list)

    # Modeled
    marriage: Optional[Sourced[GedcomDate]] = None
    divorce: Optional[Sourced[GedcomDate]] = None

    # Level-1 tags with no typed slot on a family (e.g. NAME)
    attributes: Dict[str, Sourced[str]] = field(default_factory=dict)

    # Derived pass
    birth_groups: List[Tuple[str, ...]] = field(default_factory=list)

    @property
    def marriage_date(self) -> Optional[GedcomDate]:
        return value_of(self.marriage)

    @property
    def divorce_date(self) -> Optional[GedcomDate]:
        return value_of(self.divorce)

    @property
    def child_ids(self) -> List[str]:
        return [child.value for child in self.children]


# -----------------------------
# Store
# -----------------------------

@dataclass(slots=True)
class EntityStore:
    """
    In-memory entity store indexed by identifier, in file order.

    Lookups of identifiers that are not present return None; a dangling
    reference is a validation concern, never a KeyError.
    """
    individuals: Dict[str, Individual] = field(default_factory=dict)
    families: Dict[str, Family] = field(default_factory=dict)

    def register_individual(self, ind: Individual) -> None:
        self.individuals[ind.identifier] = ind

    def register_family(self, fam: Family) -> None:
        self.families[fam.identifier] = fam

    def get_individual(self, identifier: Optional[str]) -> Optional[Individual]:
        if not identifier:
            return None
        return self.individuals.get(identifier)

    def get_family(self, identifier: Optional[str]) -> Optional[Family]:
        if not identifier:
            return None
        return self.families.get(identifier)

    def husband_of(self, fam: Family) -> Optional[Individual]:
        return self.get_individual(value_of(fam.husband))

    def wife_of(self, fam: Family) -> Optional[Individual]:
        return self.get_individual(value_of(fam.wife))

    def spouses_of(self, fam: Family) -> Iterator[Tuple[str, Sourced[str], Individual]]:
        """
        Yield (role, reference, individual) for each spouse that resolves.

        role is "husband" or "wife"; unresolved references are skipped.
        """
        for role, ref in (("husband", fam.husband), ("wife", fam.wife)):
            if ref is None:
                continue
            ind = self.get_individual(ref.value)
            if ind is not None:
                yield role, ref, ind

    def children_of(self, fam: Family) -> List[Individual]:
        children = []
        for ref in fam.children:
            child = self.get_individual(ref.value)
            if child is not None:
                children.append(child)
        return children

    def spouse_families(self, ind: Individual) -> List[Family]:
        """Families that list ``ind`` as husband or wife."""
        return [
            fam
            for fam in self.families.values()
            if ind.identifier in (value_of(fam.husband), value_of(fam.wife))
        ]

from __future__ import annotations

from .entities import (
    EntityStore,
    Family,
    Individual,
    Sex,
    Sourced,
    value_of,
)

__all__ = [
    "EntityStore",
    "Family",
    "Individual",
    "Sex",
    "Sourced",
    "value_of",
]

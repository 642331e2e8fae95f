from __future__ import annotations

from typing import Optional, Sequence, Union

from gedcom_validator.dates import GedcomDate, parse_date
from gedcom_validator.loader.tokenizer import Record, line_level, tokenize_line
from gedcom_validator.logging import get_logger
from gedcom_validator.registry.entities import (
    EntityStore,
    Family,
    Individual,
    Sex,
    Sourced,
)
from gedcom_validator.registry.utils import allocate_key

log = get_logger(__name__)

Entity = Union[Individual, Family]

# Level-1 tags whose value is carried by the following "<level+1> DATE" line.
DATE_EVENT_TAGS = frozenset({"BIRT", "DEAT", "MARR", "DIV"})

_INDIVIDUAL_DATE_FIELDS = {"BIRT": "birth", "DEAT": "death"}
_FAMILY_DATE_FIELDS = {"MARR": "marriage", "DIV": "divorce"}
_FAMILY_REFERENCE_FIELDS = {"HUSB": "husband", "WIFE": "wife"}
_INDIVIDUAL_LINK_FIELDS = {"FAMC": "families_as_child", "FAMS": "families_as_spouse"}


class StoreBuilder:
    """
    Turns the flat line sequence into an EntityStore.

    State machine over a single cursor:

      * no current entity  -- after HEAD/TRLR/NOTE, an unknown level-0
        record, or at start of input
      * current entity = X -- after "0 <ID> INDI" or "0 <ID> FAM"

    Subordinate lines are attached to the current entity. A date-bearing
    event (BIRT, DEAT, MARR, DIV) takes its value from the line right after
    it, so the cursor advances by two lines for those: the lookahead line is
    consumed even when it is not a usable DATE record.

    Nothing here raises on bad input; unusable lines are skipped and logged
    at DEBUG.
    """

    def __init__(self, lines: Sequence[str]):
        self.lines = list(lines)
        self.store = EntityStore()
        self.current: Optional[Entity] = None
        self.cursor = 0
        self.skipped = 0

    # ------------------------------------------------------------------ #
    # Driver
    # ------------------------------------------------------------------ #

    def build(self) -> EntityStore:
        while self.cursor < len(self.lines):
            self.cursor += self._step(self.cursor)

        log.info(
            "Built store: INDI=%d FAM=%d (skipped %d lines)",
            len(self.store.individuals),
            len(self.store.families),
            self.skipped,
        )
        return self.store

    def _step(self, index: int) -> int:
        """Handle the line at ``index``; return how many lines were consumed."""
        raw = self.lines[index]
        lineno = index + 1
        record = tokenize_line(raw, lineno=lineno)

        if record is None:
            if raw.strip():
                self.skipped += 1
                log.debug("Line %d skipped: %r", lineno, raw)
            if line_level(raw) == 0:
                # Unknown record kind; its subordinate lines belong to nobody.
                self.current = None
            return 1

        if record.level == 0:
            self._start_record(record)
            return 1

        if self.current is None:
            log.debug("Line %d ignored: no current record", lineno)
            return 1

        if record.tag in DATE_EVENT_TAGS:
            self._attach_event(record, self._lookahead_date(record, index + 1))
            return 2

        if record.tag == "DATE":
            log.debug("Line %d ignored: DATE not under an event", lineno)
            return 1

        self._attach_field(record)
        return 1

    # ------------------------------------------------------------------ #
    # Level-0 records
    # ------------------------------------------------------------------ #

    def _start_record(self, record: Record) -> None:
        if record.tag == "INDI":
            key = allocate_key(record.data, self.store.individuals)
            ind = Individual(identifier=key, original_id=record.data, lineno=record.lineno)
            self.store.register_individual(ind)
            self.current = ind
        elif record.tag == "FAM":
            key = allocate_key(record.data, self.store.families)
            fam = Family(identifier=key, original_id=record.data, lineno=record.lineno)
            self.store.register_family(fam)
            self.current = fam
        else:
            self.current = None
            return

        if key != record.data:
            log.warning(
                "Line %d: duplicate %s id %s stored as %s",
                record.lineno,
                record.tag,
                record.data,
                key,
            )

    # ------------------------------------------------------------------ #
    # Subordinate lines
    # ------------------------------------------------------------------ #

    def _lookahead_date(self, event: Record, index: int) -> Optional[Sourced[GedcomDate]]:
        """
        Read the DATE line that must directly follow ``event``.

        Returns None at end of input, when the next line is not a DATE
        record one level deeper, or when its value is not "D MON YYYY".
        """
        if index >= len(self.lines):
            log.debug("Line %d: %s at end of input has no DATE", event.lineno, event.tag)
            return None

        date_record = tokenize_line(self.lines[index], lineno=index + 1)
        if (
            date_record is None
            or date_record.tag != "DATE"
            or date_record.level != event.level + 1
        ):
            log.debug("Line %d: %s not followed by a DATE line", event.lineno, event.tag)
            return None

        parsed = parse_date(date_record.data)
        if parsed is None:
            log.debug("Line %d: unparseable date %r", date_record.lineno, date_record.data)
            return None

        return Sourced(parsed, date_record.lineno)

    def _attach_event(self, record: Record, value: Optional[Sourced[GedcomDate]]) -> None:
        entity = self.current
        fields = _INDIVIDUAL_DATE_FIELDS if isinstance(entity, Individual) else _FAMILY_DATE_FIELDS
        name = fields.get(record.tag)

        if name is None:
            # e.g. MARR under INDI: keep the raw value, no typed slot
            if value is not None:
                entity.attributes[record.tag] = Sourced(str(value.value), value.lineno)
            return

        if value is not None:
            setattr(entity, name, value)

    def _attach_field(self, record: Record) -> None:
        entity = self.current
        tag = record.tag
        value = Sourced(record.data, record.lineno)

        if isinstance(entity, Family):
            if tag == "CHIL":
                entity.children.append(value)
            elif tag in _FAMILY_REFERENCE_FIELDS:
                setattr(entity, _FAMILY_REFERENCE_FIELDS[tag], value)
            else:
                entity.attributes[tag] = value
            return

        if tag == "NAME":
            entity.name = value
        elif tag == "SEX":
            entity.sex = Sourced(Sex.parse(record.data), record.lineno)
        elif tag in _INDIVIDUAL_LINK_FIELDS:
            links = getattr(entity, _INDIVIDUAL_LINK_FIELDS[tag])
            if record.data and all(link.value != record.data for link in links):
                links.append(value)
        else:
            entity.attributes[tag] = value


def build_store(lines: Sequence[str]) -> EntityStore:
    """
    Build an EntityStore from raw input lines (without line terminators).

    Line numbers in the store are 1-based positions in ``lines``.
    """
    return StoreBuilder(lines).build()

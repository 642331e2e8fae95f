# src/gedcom_validator/loader/tokenizer.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional


@dataclass(frozen=True)
class Record:
    """
    A single tokenized line.

    Attributes:
        level: Parsed level (0, 1 or 2).
        tag: Upper-case tag from the level's vocabulary, e.g. "INDI", "BIRT".
        data: Remaining tokens re-joined with single spaces (may be empty).
              For level-0 INDI/FAM lines this is the record's ID.
        lineno: 1-based line number in the source, 0 when unknown.
    """
    level: int
    tag: str
    data: str
    lineno: int = 0


# Level-0 tags written in the tag position ("0 HEAD") rather than after an ID
# ("0 @I1@ INDI").
BARE_LEVEL_ZERO_TAGS: FrozenSet[str] = frozenset({"HEAD", "TRLR", "NOTE"})

VOCABULARY: Dict[int, FrozenSet[str]] = {
    0: frozenset({"INDI", "FAM", "HEAD", "TRLR", "NOTE"}),
    1: frozenset({
        "NAME", "SEX", "BIRT", "DEAT", "FAMC", "FAMS",
        "MARR", "HUSB", "WIFE", "CHIL", "DIV",
    }),
    2: frozenset({"DATE"}),
}

TAG_MEANINGS: Dict[str, str] = {
    "INDI": "Individual record",
    "NAME": "Name of individual",
    "SEX": "Sex of individual",
    "BIRT": "Birth of individual",
    "DEAT": "Death of individual",
    "FAMC": "Family where individual is a child",
    "FAMS": "Family where individual is a spouse",
    "FAM": "Family record",
    "MARR": "Marriage event for family",
    "HUSB": "Husband in family",
    "WIFE": "Wife in family",
    "CHIL": "Child in family",
    "DIV": "Divorce event in family",
    "DATE": "Date that an event occurred",
    "HEAD": "Header record at beginning of file",
    "TRLR": "Trailer record at end of file",
    "NOTE": "Comments, may be used to describe tests",
}


def _clean(line: str) -> str:
    """Strip an optional UTF-8 BOM and surrounding whitespace."""
    return line.lstrip("\ufeff").strip()


def _is_ascii_digits(token: str) -> bool:
    # str.isdigit() also accepts superscripts and other digits int() rejects
    return token.isascii() and token.isdigit()


def line_level(line: str) -> Optional[int]:
    """
    Return the leading level of a raw line, or None if it has none.

    Used by the builder to notice level-0 lines whose tag is not in the
    vocabulary.
    """
    parts = _clean(line).split()
    if not parts or not _is_ascii_digits(parts[0]):
        return None
    return int(parts[0])


def is_valid_tag(tag: str, level: int) -> bool:
    return tag in VOCABULARY.get(level, frozenset())


def tokenize_line(line: str, lineno: int = 0) -> Optional[Record]:
    """
    Parse a single line into a Record, or None if it cannot be used.

    Layout:
        <level> <TAG> [<data>]          levels 1-2, and HEAD/TRLR/NOTE at 0
        0 <ID> <TAG>                    INDI/FAM records

    Never raises. Blank lines, a missing or non-numeric level, a missing tag
    and tags outside the level's vocabulary all yield None.

    Examples:
        "0 HEAD"              -> Record(0, "HEAD", "")
        "0 @I1@ INDI"         -> Record(0, "INDI", "@I1@")
        "1 NAME John /Doe/"   -> Record(1, "NAME", "John /Doe/")
        "2 date 4 jul 1776"   -> Record(2, "DATE", "4 jul 1776")
    """
    if line is None:
        return None

    parts = _clean(str(line)).split()
    if len(parts) < 2 or not _is_ascii_digits(parts[0]):
        return None

    level = int(parts[0])

    if level == 0 and parts[1].upper() not in BARE_LEVEL_ZERO_TAGS:
        # "0 @I1@ INDI": the ID sits in the data slot, the tag comes after it.
        if len(parts) < 3:
            return None
        tag = parts[2].upper()
        data = parts[1]
    else:
        tag = parts[1].upper()
        data = " ".join(parts[2:])

    if not is_valid_tag(tag, level):
        return None

    return Record(level=level, tag=tag, data=data, lineno=lineno)


def tokenize_lines(lines: Iterable[str]) -> List[Record]:
    """Tokenize every line, dropping the ones that yield None."""
    records: List[Record] = []
    for lineno, line in enumerate(lines, start=1):
        record = tokenize_line(line, lineno=lineno)
        if record is not None:
            records.append(record)
    return records


# ---------------------------------------------------------------------------
# Line trace
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LineTrace:
    """How one input line was understood: level, tag and what the tag means."""
    lineno: int
    line: str
    level: Optional[int]
    tag: Optional[str]
    meaning: str
    valid: bool


def trace_lines(lines: Iterable[str]) -> List[LineTrace]:
    """
    Describe each non-blank input line.

    Lines that do not tokenize are still listed (``valid=False``) with
    whatever level could be read, so the trace shows exactly which lines the
    builder will skip.
    """
    traces: List[LineTrace] = []
    for lineno, line in enumerate(lines, start=1):
        text = _clean(line)
        if not text:
            continue

        record = tokenize_line(text, lineno=lineno)
        if record is None:
            traces.append(
                LineTrace(
                    lineno=lineno,
                    line=text,
                    level=line_level(text),
                    tag=None,
                    meaning="Invalid tag",
                    valid=False,
                )
            )
            continue

        traces.append(
            LineTrace(
                lineno=lineno,
                line=text,
                level=record.level,
                tag=record.tag,
                meaning=TAG_MEANINGS.get(record.tag, ""),
                valid=True,
            )
        )
    return traces

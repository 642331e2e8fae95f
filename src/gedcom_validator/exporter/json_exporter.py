"""
json_exporter.py
Structured JSON exporter for the entity store and validation findings.

This exporter:
- Converts dataclasses and objects to dictionaries (NOT strings)
- Writes dates as "D MON YYYY" and enums as their value
- Is deterministic: the same store always gives the same document
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from gedcom_validator.dates import GedcomDate
from gedcom_validator.logging import get_logger

log = get_logger(__name__)


def _to_json_compatible(obj: Any) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Primitives pass through
    - GedcomDate → "D MON YYYY", Enum → its value
    - dataclasses → dict (recursively)
    - dict → dict (recursively)
    - list / tuple / set → list (recursively)
    - Unknown objects → str(obj)
    """
    # Sex is a str Enum, so this must come before the primitive check
    if isinstance(obj, Enum):
        return obj.value

    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if isinstance(obj, GedcomDate):
        return str(obj)

    if is_dataclass(obj):
        return {f.name: _to_json_compatible(getattr(obj, f.name)) for f in fields(obj)}

    if isinstance(obj, dict):
        return {str(k): _to_json_compatible(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set)):
        return [_to_json_compatible(v) for v in obj]

    # Last resort
    return str(obj)


def build_store_dict(store: Any, findings: Optional[Iterable[Any]] = None) -> Dict[str, Any]:
    """
    Convert the store (and optionally the findings) into a JSON-safe dict.
    """
    individuals = getattr(store, "individuals", {}) or {}
    families = getattr(store, "families", {}) or {}
    data: Dict[str, Any] = {
        "counts": {
            "individuals": len(individuals),
            "families": len(families),
        },
        "individuals": {
            key: _to_json_compatible(ent) for key, ent in individuals.items()
        },
        "families": {
            key: _to_json_compatible(ent) for key, ent in families.items()
        },
    }
    if findings is not None:
        finding_list = [_to_json_compatible(f) for f in findings]
        data["findings"] = finding_list
        data["counts"]["findings"] = len(finding_list)
    return data


def serialize_store_to_json_string(
    store: Any,
    findings: Optional[Iterable[Any]] = None,
    indent: Optional[int] = 2,
) -> str:
    return json.dumps(
        build_store_dict(store, findings),
        indent=indent,
        ensure_ascii=False,
    )


def export_store_json(
    store: Any,
    output_path: str | Path,
    findings: Optional[Iterable[Any]] = None,
    indent: Optional[int] = 2,
) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(
        "Exporting store JSON to: %s (INDI=%d, FAM=%d)",
        output_path,
        len(getattr(store, "individuals", {}) or {}),
        len(getattr(store, "families", {}) or {}),
    )

    json_str = serialize_store_to_json_string(store, findings, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)

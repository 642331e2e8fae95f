from __future__ import annotations

from typing import Container, Optional


def normalize_id(identifier: Optional[str]) -> Optional[str]:
    """
    Normalize a record ID for comparison:
      - strip whitespace
      - uppercase
      - ensure wrapped in @...@
    """
    if identifier is None:
        return None

    p = identifier.strip().upper()
    if not p:
        return None

    if not p.startswith("@"):
        p = "@" + p
    if not p.endswith("@") or len(p) == 1:
        p = p + "@"

    return p


def allocate_key(identifier: str, taken: Container[str]) -> str:
    """
    Return ``identifier`` if free, else the first free ``<identifier><n>``.

    A repeated "@I1@" is stored as "@I1@1", then "@I1@2", ...
    """
    if identifier not in taken:
        return identifier

    n = 1
    while f"{identifier}{n}" in taken:
        n += 1
    return f"{identifier}{n}"

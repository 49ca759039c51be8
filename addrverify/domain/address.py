# addrverify/domain/address.py
from __future__ import annotations

import re

# Street-type abbreviations expanded before comparison. Keys never collide with
# each other's expansions, so the order of substitution does not matter.
STREET_ABBREVIATIONS: dict[str, str] = {
    "ave": "avenue",
    "st": "street",
    "rd": "road",
    "dr": "drive",
    "ln": "lane",
    "ct": "court",
    "blvd": "boulevard",
    "pl": "place",
}

_PUNCT_RE = re.compile(r"[.,]")
_WS_RE = re.compile(r"\s+")
_ABBR_RES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(rf"\b{abbr}\b"), full) for abbr, full in STREET_ABBREVIATIONS.items()
]


def normalize_address(address: str | None) -> str:
    """
    Lexical canonical form of a free-text address:
      lowercase, '.' and ',' removed, street types expanded, single-spaced.

    Total: empty/None => ''.
    """
    if not address:
        return ""

    s = address.lower()
    s = _PUNCT_RE.sub("", s)

    for rx, full in _ABBR_RES:
        s = rx.sub(full, s)

    return _WS_RE.sub(" ", s).strip()


def is_blank(address: str | None) -> bool:
    return not (address or "").strip()

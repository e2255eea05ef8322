"""Canonical comparison keys and the person similarity score.

Every function here is total: malformed input yields an empty key (meaning
"unknown") instead of raising, so one bad field never fails a batch.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import TYPE_CHECKING, Protocol

from mattergraph.config.engine import DEFAULT_COMPANY_TOKENS
from mattergraph.domain.model import AddressRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

_SENTINELS = frozenset({"null", "undefined", "none", "[object object]"})
_ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
_PUNCTUATION = re.compile(r"[^\w\s]")
_DOB_FORMATS = (
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%Y/%m/%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
)

NAME_WEIGHT = 70
ADDRESS_WEIGHT = 20
DOB_WEIGHT = 10


class PersonLike(Protocol):
    """Anything carrying the three signals used for similarity scoring."""

    @property
    def name(self) -> str | None: ...

    @property
    def dob(self) -> str | None: ...

    @property
    def address(self) -> AddressRecord | None: ...


def _as_text(value: object) -> str:
    if value is None or value is False:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping | list | tuple | set):
        return ""
    text = str(value)
    if text.strip().lower() in _SENTINELS:
        return ""
    return text


def normalize_name(value: object) -> str:
    """Lowercase, trim and collapse internal whitespace."""

    return " ".join(_as_text(value).lower().split())


def normalize_identifier(value: object) -> str | None:
    """Strip all whitespace from an ACN/ABN; empty identifiers become ``None``."""

    text = "".join(_as_text(value).split())
    return text or None


def normalize_dob(value: object) -> str:
    """Return ``YYYY-MM-DD`` or ``""`` when the date is unknown or unparseable."""

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return ""
    text = value.strip()
    if not text:
        return ""
    if _ISO_PREFIX.match(text):
        try:
            return date.fromisoformat(text[:10]).isoformat()
        except ValueError:
            return ""
    for fmt in _DOB_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()  # noqa: DTZ007
        except ValueError:
            continue
    return ""


def address_text(value: object) -> str:
    """Human-readable single-line form of an address (components joined by commas)."""

    if isinstance(value, AddressRecord):
        if value.full_text and value.full_text.strip():
            return value.full_text.strip()
        parts = (
            value.components.line1,
            value.components.line2,
            value.components.suburb,
            value.components.state,
            value.components.postcode,
        )
        return ", ".join(part.strip() for part in parts if part and part.strip())
    if isinstance(value, Mapping):
        full = value.get("address")
        if isinstance(full, str) and full.strip():
            return full.strip()
        keys = (
            ("address_1", "address1"),
            ("address_2", "address2"),
            ("suburb",),
            ("state",),
            ("postcode",),
        )
        parts: list[str] = []
        for aliases in keys:
            for alias in aliases:
                part = value.get(alias)
                if part:
                    parts.append(str(part).strip())
                    break
        return ", ".join(part for part in parts if part)
    return _as_text(value).strip()


def normalize_address(value: object) -> str:
    """Lowercase, strip punctuation and collapse whitespace of an address."""

    text = _PUNCTUATION.sub("", address_text(value).lower())
    return " ".join(text.split())


def person_key(name: object, dob: object) -> str:
    """Identity key: bare normalized name when the dob is unknown, else ``name|dob``."""

    normalized_name = normalize_name(name)
    normalized_dob = normalize_dob(dob)
    if not normalized_dob:
        return normalized_name
    return f"{normalized_name}|{normalized_dob}"


def slug(value: object) -> str:
    """Normalized name with spaces replaced by underscores, used inside entity ids."""

    return normalize_name(value).replace(" ", "_")


def is_company_name(name: object, tokens: Iterable[str] = DEFAULT_COMPANY_TOKENS) -> bool:
    """True when the normalized name carries a legal-entity token (``pty``, ``ltd``, ...)."""

    words = set(_PUNCTUATION.sub(" ", normalize_name(name)).split())
    return any(token in words for token in tokens)


def string_similarity(first: str, second: str) -> float:
    """Character-overlap ratio ``2 * matches / (len_a + len_b)`` in ``[0, 1]``."""

    if not first or not second:
        return 0.0
    if first == second:
        return 1.0
    longer, shorter = (first, second) if len(first) > len(second) else (second, first)
    remaining = list(longer.lower())
    matches = 0
    for char in shorter.lower():
        try:
            remaining.remove(char)
        except ValueError:
            continue
        matches += 1
    return (matches * 2) / (len(longer) + len(shorter))


def _name_score(first: str, second: str) -> float:
    if first == second:
        return NAME_WEIGHT
    first_parts = first.split()
    second_parts = second.split()
    if not first_parts or not second_parts:
        return 0.0
    if first_parts[-1] == second_parts[-1] and len(first_parts[-1]) > 2:
        score = 40.0
        if first_parts[0] == second_parts[0] and len(first_parts[0]) > 1:
            score += 20
        elif first_parts[0][:1] == second_parts[0][:1]:
            score += 5
        return score
    return string_similarity(first, second) * 30


def _address_score(first: object, second: object) -> float:
    first_text = normalize_name(address_text(first))
    second_text = normalize_name(address_text(second))
    if not first_text or not second_text:
        return 0.0
    if first_text == second_text:
        return ADDRESS_WEIGHT
    first_parts = [part.strip() for part in first_text.split(",")]
    second_parts = [part.strip() for part in second_text.split(",")]
    matching = sum(1 for part in first_parts if len(part) > 3 and part in second_parts)
    if not matching:
        return 0.0
    return matching / max(len(first_parts), len(second_parts)) * 10


def similarity(first: PersonLike, second: PersonLike) -> int:
    """Weighted 0-100 confidence that two person-like records are the same person.

    Name is worth 70 points and address 20; the 10 dob points only enter the
    achievable maximum when both sides present a dob.
    """

    earned = _name_score(normalize_name(first.name), normalize_name(second.name))
    achievable = NAME_WEIGHT + ADDRESS_WEIGHT
    earned += _address_score(first.address, second.address)

    first_dob = normalize_dob(first.dob)
    second_dob = normalize_dob(second.dob)
    if first_dob and second_dob:
        achievable += DOB_WEIGHT
        if first_dob == second_dob:
            earned += DOB_WEIGHT

    return max(0, min(100, round(100 * earned / achievable)))

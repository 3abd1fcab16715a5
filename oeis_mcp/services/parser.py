# SPDX-License-Identifier: MIT

# services/parser.py
"""
Raw OEIS hit -> canonical ``Sequence``.

The upstream JSON is loosely structured: most fields are optional, text
fields come as lists of lines, and the terms are one comma-separated
string. Missing fields become empty values. Only structural corruption
(no usable number, non-integer terms, impossible field types) is an
error, and it is always reported as ``SequenceParseError``.
"""

from typing import Any, Iterable, List, Mapping, Tuple

from pydantic import ValidationError

from ..errors import SequenceParseError
from ..schema.common import RawHit, Sequence, format_sequence_id

# upstream key -> Sequence field, for the line-oriented text fields
TEXT_LIST_FIELDS = {
    "comment": "comments",
    "formula": "formulas",
    "xref": "cross_references",
    "example": "examples",
}


def _parse_number(raw: Mapping[str, Any]) -> int:
    number = raw.get("number")
    if isinstance(number, bool):
        raise SequenceParseError(f"Sequence number must be an integer, got {number!r}")
    if isinstance(number, str) and number.strip().isdigit():
        number = int(number.strip())
    if not isinstance(number, int):
        raise SequenceParseError(f"Missing or malformed sequence number: {number!r}")
    if number < 0:
        raise SequenceParseError(f"Sequence number must be non-negative, got {number}")
    return number


def _parse_terms(value: Any, sequence_id: str) -> Tuple[int, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        tokens: Iterable[Any] = [t for t in (p.strip() for p in value.split(",")) if t]
    elif isinstance(value, list):
        tokens = value
    else:
        raise SequenceParseError(f"{sequence_id}: data must be a string or list, got {type(value).__name__}")

    terms: List[int] = []
    for token in tokens:
        if isinstance(token, bool):
            raise SequenceParseError(f"{sequence_id}: non-numeric term {token!r}")
        if isinstance(token, int):
            terms.append(token)
            continue
        try:
            terms.append(int(str(token).strip()))
        except ValueError:
            raise SequenceParseError(f"{sequence_id}: non-numeric term {token!r}") from None
    return tuple(terms)


def _parse_text(value: Any, field: str, sequence_id: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SequenceParseError(f"{sequence_id}: {field} must be a string, got {type(value).__name__}")
    return value.strip()


def _parse_lines(value: Any, field: str, sequence_id: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(line, str) for line in value):
        raise SequenceParseError(f"{sequence_id}: {field} must be a list of strings")
    # blank lines stay in place, trimmed to ""
    return tuple(line.strip() for line in value)


def _parse_keywords(value: Any, sequence_id: str) -> frozenset:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list) or not all(isinstance(k, str) for k in value):
        raise SequenceParseError(f"{sequence_id}: keyword must be a string or list of strings")
    return frozenset(k.strip() for k in value if k.strip())


def parse(raw: RawHit) -> Sequence:
    """
    Build a ``Sequence`` from one upstream hit.

    Args:
        raw: Decoded JSON object for a single OEIS entry

    Returns:
        A new, frozen Sequence

    Raises:
        SequenceParseError: If the hit is structurally corrupt
    """
    if not isinstance(raw, Mapping):
        raise SequenceParseError(f"Expected a JSON object per hit, got {type(raw).__name__}")

    sequence_id = format_sequence_id(_parse_number(raw))
    fields = {
        "id": sequence_id,
        "data": _parse_terms(raw.get("data"), sequence_id),
        "name": _parse_text(raw.get("name"), "name", sequence_id),
        "author": _parse_text(raw.get("author"), "author", sequence_id),
        "keywords": _parse_keywords(raw.get("keyword"), sequence_id),
    }
    for upstream_key, field in TEXT_LIST_FIELDS.items():
        fields[field] = _parse_lines(raw.get(upstream_key), upstream_key, sequence_id)

    try:
        return Sequence(**fields)
    except ValidationError as e:
        raise SequenceParseError(f"{sequence_id}: {e}") from e


def parse_many(raws: Iterable[RawHit]) -> List[Sequence]:
    """Parse every hit; one corrupt hit fails the whole batch."""
    return [parse(raw) for raw in raws]

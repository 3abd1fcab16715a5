# SPDX-License-Identifier: MIT

# schema/common.py
"""
Common types and base models for the OEIS MCP server.

This module defines the canonical ``Sequence`` record every capability
renders, the sequence-id pattern, and the helpers that validate caller
input before anything leaves the process.
"""

import re
from typing import Any, Dict, FrozenSet, Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from ..errors import InvalidParams

# =====================================================================
# SEQUENCE IDENTIFIERS
# =====================================================================

SEQUENCE_ID_PATTERN = r"^[A-Z][0-9]{6}$"
"""One letter prefix followed by six zero-padded digits, e.g. A000045."""

_SEQUENCE_ID_RE = re.compile(SEQUENCE_ID_PATTERN)

RawHit = Dict[str, Any]
"""One unparsed record from the upstream JSON search response."""


def format_sequence_id(number: int) -> str:
    """Render an upstream sequence number as its canonical A-number."""
    return f"A{number:06d}"


def validate_sequence_id(value: Any) -> str:
    """Return the trimmed, upper-cased id or raise ``InvalidParams``."""
    if not isinstance(value, str):
        raise InvalidParams(
            f"Sequence id must be a string like 'A000045', got {type(value).__name__}"
        )
    candidate = value.strip().upper()
    if not _SEQUENCE_ID_RE.match(candidate):
        raise InvalidParams(
            f"Invalid sequence id {value!r}. Expected a letter followed by "
            f"six digits (pattern {SEQUENCE_ID_PATTERN}), e.g. 'A000045'"
        )
    return candidate


def validate_subsequence(terms: Any) -> List[int]:
    """Return the terms as a list of ints or raise ``InvalidParams``."""
    if isinstance(terms, (str, bytes)) or not isinstance(terms, Iterable):
        raise InvalidParams("Subsequence must be a list of integers, e.g. [1, 1, 2, 3, 5]")
    values = list(terms)
    if not values:
        raise InvalidParams("Subsequence must contain at least one integer")
    # bool is an int subclass but never a sequence term
    if any(isinstance(v, bool) or not isinstance(v, int) for v in values):
        raise InvalidParams(f"Subsequence must contain only integers, got {values!r}")
    return values


# =====================================================================
# SEQUENCE RECORD
# =====================================================================

class Sequence(BaseModel):
    """
    Canonical parsed representation of one OEIS entry.

    Instances are frozen: a new fetch always produces a new record. Text
    fields are trimmed by the parser before construction; keywords are a
    set and serialize sorted so JSON output is stable across processes.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: str = Field(..., pattern=SEQUENCE_ID_PATTERN, description="Canonical A-number")
    data: Tuple[int, ...] = Field(default=(), description="Sequence terms in upstream order")
    name: str = Field(default="", description="Descriptive name of the sequence")
    comments: Tuple[str, ...] = ()
    formulas: Tuple[str, ...] = ()
    cross_references: Tuple[str, ...] = ()
    keywords: FrozenSet[str] = frozenset()
    author: str = ""
    examples: Tuple[str, ...] = ()

    @field_serializer("keywords")
    def _sorted_keywords(self, keywords: FrozenSet[str]) -> List[str]:
        return sorted(keywords)

    def to_json_dict(self) -> Dict[str, Any]:
        """JSON-compatible dict using the public camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)

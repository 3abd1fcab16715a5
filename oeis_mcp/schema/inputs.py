# SPDX-License-Identifier: MIT

# schema/inputs.py
"""
Input models for the OEIS MCP capabilities.

Each capability descriptor carries one of these models as its input
schema. The router validates raw call arguments against it before the
handler runs; id/term format rules live with the fetcher so the same
checks apply no matter how a handler is reached.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BaseCapabilityInput(BaseModel):
    """Common configuration: unknown arguments are rejected."""

    model_config = ConfigDict(extra="forbid")


class EmptyInput(BaseCapabilityInput):
    """Capabilities that take no arguments."""


class GetUrlInput(BaseCapabilityInput):
    """Input schema for the get_url tool."""

    id: Optional[str] = Field(
        default=None,
        description="Optional sequence ID (e.g. 'A000045'). Omit for the OEIS homepage.",
    )


class FindByIdInput(BaseCapabilityInput):
    """Input schema for the find_by_id tool."""

    id: str = Field(..., description="OEIS sequence ID, e.g. 'A000045'")

    @field_validator("id", mode="before")
    @classmethod
    def clean_id(cls, v: Any) -> Any:
        """Strip surrounding whitespace; format is checked by the fetcher."""
        return v.strip() if isinstance(v, str) else v


class SearchBySubsequenceInput(BaseCapabilityInput):
    """Input schema for the search_by_subsequence tool."""

    subsequence: List[int] = Field(
        ...,
        description="Consecutive terms to search for, e.g. [1, 1, 2, 3, 5]",
    )


class SequenceAnalysisInput(BaseCapabilityInput):
    """Input schema for the sequence_analysis prompt."""

    sequence_id: str = Field(..., description="The OEIS sequence ID to analyze (e.g., 'A000045')")


class SequenceResourceInput(BaseCapabilityInput):
    """Template variables extracted from oeis://sequence/{id}."""

    id: str = Field(..., description="OEIS sequence ID from the resource URI")

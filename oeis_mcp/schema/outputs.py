# SPDX-License-Identifier: MIT

# schema/outputs.py
"""
Structured output models for the OEIS MCP tools.

Tools return these as ``structured_content`` next to a human-readable
text block, so clients can deserialize the result without scraping text.
"""

from typing import Any, Dict, List

from pydantic import BaseModel

from .common import Sequence


class FindResponse(BaseModel):
    """Output of find_by_id."""

    result: Sequence

    def to_structured(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class SearchResponse(BaseModel):
    """Output of search_by_subsequence. An empty list means no matches."""

    results: List[Sequence]

    def to_structured(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

# SPDX-License-Identifier: MIT

# =====================================================================
# Sequence Tools (get_url, find_by_id, search_by_subsequence)
# =====================================================================
"""
Imperative OEIS tools.

Every tool returns a FastMCP ``ToolResult``: a text block for the model
to read and, where there is a record, ``structured_content`` matching
the models in ``schema/outputs.py``.
"""

import logging
from typing import Annotated, List, Optional

from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

from ..errors import translate_errors
from ..schema.common import validate_sequence_id
from ..schema.outputs import FindResponse, SearchResponse
from ..services.lookup import fetch_sequence, search_sequences
from ..services.oeis_client import DEFAULT_BASE_URL, SequenceFetcher
from ..services.rendering import render_markdown, render_search_summary

logger = logging.getLogger(__name__)


def _text(text: str) -> List[TextContent]:
    return [TextContent(type="text", text=text)]


class SequenceTools:
    """Tool handlers bound to one shared fetcher."""

    def __init__(self, fetcher: SequenceFetcher, base_url: str = DEFAULT_BASE_URL):
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/")

    async def get_url(
        self,
        id: Annotated[
            Optional[str],
            Field(description="Optional sequence ID (e.g. 'A000045'). Omit for the OEIS homepage."),
        ] = None,
    ) -> ToolResult:
        """Get a URL of OEIS entry."""
        with translate_errors("get_url"):
            url = self.base_url if id is None else f"{self.base_url}/{validate_sequence_id(id)}"
        return ToolResult(content=_text(url))

    async def find_by_id(
        self,
        id: Annotated[str, Field(description="OEIS sequence ID, e.g. 'A000045'")],
    ) -> ToolResult:
        """Find a sequence by its ID."""
        logger.info(f"Find sequence by ID: {id!r}")
        with translate_errors("find_by_id"):
            sequence = await fetch_sequence(self.fetcher, id)

        response = FindResponse(result=sequence)
        return ToolResult(
            content=_text(render_markdown(sequence)),
            structured_content=response.to_structured(),
        )

    async def search_by_subsequence(
        self,
        subsequence: Annotated[
            List[int],
            Field(description="Consecutive terms to search for, e.g. [1, 1, 2, 3, 5]"),
        ],
    ) -> ToolResult:
        """Search sequences by subsequence."""
        logger.info(f"Search sequences by subsequence: {subsequence!r}")
        with translate_errors("search_by_subsequence"):
            sequences = await search_sequences(self.fetcher, subsequence)

        response = SearchResponse(results=sequences)
        return ToolResult(
            content=_text(render_search_summary(subsequence, sequences)),
            structured_content=response.to_structured(),
        )

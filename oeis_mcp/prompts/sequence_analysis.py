# SPDX-License-Identifier: MIT

"""
sequence_analysis prompt.

Produces a two-message conversation: the user asks for a comprehensive
analysis of a sequence, and the assistant turn is pre-seeded with the
fetched record so the model starts from real data.
"""

import logging
from typing import Annotated, List

from mcp.types import PromptMessage, TextContent
from pydantic import Field

from ..errors import translate_errors
from ..schema.common import Sequence
from ..services.lookup import fetch_sequence
from ..services.oeis_client import SequenceFetcher
from ..services.rendering import render_markdown

logger = logging.getLogger(__name__)

ANALYSIS_REQUEST = (
    "Please provide a comprehensive analysis of OEIS sequence {sequence_id}. Include:\n"
    "1. The definition and meaning of this sequence\n"
    "2. Mathematical properties and patterns\n"
    "3. Real-world applications or significance\n"
    "4. Relationships to other sequences\n"
    "5. Interesting facts or observations"
)


def build_user_message(sequence_id: str) -> PromptMessage:
    return PromptMessage(
        role="user",
        content=TextContent(type="text", text=ANALYSIS_REQUEST.format(sequence_id=sequence_id)),
    )


def build_assistant_message(sequence: Sequence) -> PromptMessage:
    return PromptMessage(
        role="assistant",
        content=TextContent(type="text", text=render_markdown(sequence)),
    )


class SequencePrompts:
    """Prompt handlers bound to one shared fetcher."""

    def __init__(self, fetcher: SequenceFetcher):
        self.fetcher = fetcher

    async def sequence_analysis(
        self,
        sequence_id: Annotated[str, Field(description="The OEIS sequence ID to analyze (e.g., 'A000045')")],
    ) -> List[PromptMessage]:
        """Analyzes an OEIS sequence in detail, providing mathematical context, patterns, and related sequences"""
        logger.info(f"Analyzing sequence: {sequence_id!r}")
        with translate_errors("sequence_analysis"):
            sequence = await fetch_sequence(self.fetcher, sequence_id)
        return [
            build_user_message(sequence.id),
            build_assistant_message(sequence),
        ]

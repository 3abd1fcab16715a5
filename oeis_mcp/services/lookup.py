# SPDX-License-Identifier: MIT

"""Fetch-then-parse helpers shared by tools, prompts and resources."""

from typing import List

from ..schema.common import Sequence
from .oeis_client import SequenceFetcher
from .parser import parse, parse_many


async def fetch_sequence(fetcher: SequenceFetcher, sequence_id: str) -> Sequence:
    """Return a freshly parsed Sequence for one A-number."""
    return parse(await fetcher.find_by_id(sequence_id))


async def search_sequences(fetcher: SequenceFetcher, terms: List[int]) -> List[Sequence]:
    """Return every parsed Sequence containing ``terms`` (possibly none)."""
    return parse_many(await fetcher.search_by_subsequence(terms))

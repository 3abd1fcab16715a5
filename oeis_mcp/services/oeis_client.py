# SPDX-License-Identifier: MIT

# services/oeis_client.py
"""
Sequence fetching from the OEIS search endpoint.

``SequenceFetcher`` is the contract the capability layer consumes: it
validates input, issues exactly one query per call and hands back raw
hits. Subclasses only supply ``query``; ``OEISClient`` does it over one
shared ``httpx.AsyncClient``, tests do it with an in-memory double.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import httpx

from ..errors import SequenceNotFound, SequenceParseError, UpstreamUnavailable
from ..schema.common import RawHit, validate_sequence_id, validate_subsequence

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://oeis.org"
DEFAULT_TIMEOUT = 10.0


class SequenceFetcher(ABC):
    """Fetch raw OEIS hits. Holds no per-request state."""

    async def find_by_id(self, sequence_id: str) -> RawHit:
        """
        Fetch the raw hit for one A-number.

        Raises:
            InvalidParams: Malformed id (no query is issued)
            SequenceNotFound: Upstream returned zero hits
            UpstreamUnavailable: Transport failure, timeout or bad status
        """
        sequence_id = validate_sequence_id(sequence_id)
        hits = await self.query(f"id:{sequence_id}")
        if not hits:
            raise SequenceNotFound(f"No sequence found (by id: {sequence_id})")

        # id: queries are exact, but prefer the matching number if upstream
        # ever returns more than one hit
        wanted = int(sequence_id[1:])
        for hit in hits:
            if isinstance(hit, dict) and hit.get("number") == wanted:
                return hit
        return hits[0]

    async def search_by_subsequence(self, terms: List[int]) -> List[RawHit]:
        """
        Fetch raw hits whose terms contain ``terms`` in order.

        An empty result list is a valid answer, not an error.

        Raises:
            InvalidParams: Empty or non-integer terms (no query is issued)
            UpstreamUnavailable: Transport failure, timeout or bad status
        """
        values = validate_subsequence(terms)
        return await self.query(",".join(str(v) for v in values))

    @abstractmethod
    async def query(self, q: str) -> List[RawHit]:
        """Issue one upstream search and return its hits."""

    async def aclose(self) -> None:
        """Release transport resources."""


def extract_hits(payload: Any) -> List[RawHit]:
    """
    Normalise the upstream body to a list of hits.

    The endpoint answers with a JSON array, ``null`` for no hits, or the
    older ``{"results": [...]}`` envelope.
    """
    if payload is None:
        return []
    if isinstance(payload, dict):
        payload = payload.get("results") or []
    if not isinstance(payload, list):
        raise SequenceParseError(f"Unexpected OEIS response shape: {type(payload).__name__}")
    return payload


class OEISClient(SequenceFetcher):
    """
    ``SequenceFetcher`` backed by the public OEIS JSON search API.

    One ``httpx.AsyncClient`` is created per instance and shared by every
    concurrent call; it carries no per-request state.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.search_url = f"{self.base_url}/search"
        self.timeout = timeout
        self.http_client = http_client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def query(self, q: str) -> List[RawHit]:
        logger.debug(f"OEIS query: {q}")
        try:
            response = await self.http_client.get(
                self.search_url,
                params={"fmt": "json", "q": q},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise UpstreamUnavailable(f"OEIS request timed out after {self.timeout}s (q={q})") from e
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailable(
                f"OEIS returned HTTP {e.response.status_code} (q={q})"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"OEIS request failed: {e} (q={q})") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise SequenceParseError(f"OEIS response is not valid JSON (q={q})") from e

        hits = extract_hits(payload)
        logger.debug(f"OEIS query {q} returned {len(hits)} hits")
        return hits

    async def aclose(self) -> None:
        await self.http_client.aclose()

import copy
from typing import Dict, List, Union

import pytest

from oeis_mcp.registry import build_registry
from oeis_mcp.services.oeis_client import SequenceFetcher

# ---------------------------------------------------------------------------
# Raw upstream hits, shaped like https://oeis.org/search?fmt=json output
# ---------------------------------------------------------------------------
FIBONACCI_HIT = {
    "number": 45,
    "data": "1,1,2,3,5,8,13,21,34,55,89,144,233,377,610,987",
    "name": "Fibonacci numbers: F(n) = F(n-1) + F(n-2) with F(0) = 0 and F(1) = 1. ",
    "comment": [
        "  Also sometimes called Lamé's sequence.",
        "F(n+2) = number of binary sequences of length n that have no consecutive 0's.",
    ],
    "formula": ["G.f.: x/(1 - x - x^2).", "F(n) = ((1+sqrt(5))^n - (1-sqrt(5))^n)/(2^n*sqrt(5))."],
    "example": ["G.f. = x + x^2 + 2*x^3 + 3*x^4 + 5*x^5 + ..."],
    "xref": ["Cf. A000032 (Lucas numbers).", "Cf. A001622 (golden ratio)."],
    "keyword": "core,nonn,nice,easy,hear,changed",
    "author": "_N. J. A. Sloane_, 1964",
    "offset": "0,4",
    "revision": 1234,
}

CATALAN_HIT = {
    "number": 108,
    "data": "1,1,2,5,14,42,132,429,1430,4862",
    "name": "Catalan numbers: C(n) = binomial(2n,n)/(n+1) = (2n)!/(n!(n+1)!).",
    "keyword": "core,nonn,easy,eigen,nice",
}


class FakeFetcher(SequenceFetcher):
    """In-memory fetcher keyed by the raw upstream query string."""

    def __init__(self):
        self.responses: Dict[str, Union[List[dict], Exception]] = {}
        self.calls: List[str] = []
        self.closed = False

    def add(self, q: str, *hits: dict) -> "FakeFetcher":
        self.responses[q] = [copy.deepcopy(h) for h in hits]
        return self

    def fail(self, q: str, error: Exception) -> "FakeFetcher":
        self.responses[q] = error
        return self

    async def query(self, q: str) -> List[dict]:
        self.calls.append(q)
        response = self.responses.get(q, [])
        if isinstance(response, Exception):
            raise response
        return response

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fibonacci_hit() -> dict:
    return copy.deepcopy(FIBONACCI_HIT)


@pytest.fixture
def catalan_hit() -> dict:
    return copy.deepcopy(CATALAN_HIT)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return (
        FakeFetcher()
        .add("id:A000045", FIBONACCI_HIT)
        .add("id:A000108", CATALAN_HIT)
        .add("1,1,2", FIBONACCI_HIT, CATALAN_HIT)
    )


@pytest.fixture
def registry(fetcher):
    return build_registry(fetcher)

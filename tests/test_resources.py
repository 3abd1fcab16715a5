import json

import pytest
from mcp import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS

from oeis_mcp.resources.sequence_resource import SequenceResourceResolver, template_to_regex


@pytest.fixture
def resolver(fetcher):
    return SequenceResourceResolver(fetcher)


def test_template_to_regex():
    pattern = template_to_regex("oeis://sequence/{id}")

    assert pattern.match("oeis://sequence/A000045").groupdict() == {"id": "A000045"}
    assert pattern.match("oeis://sequence/A000045/terms") is None
    assert pattern.match("oeis://sequence/") is None
    assert pattern.match("oeisXsequence/A000045") is None


def test_resolver_advertises_template(resolver):
    assert resolver.uri_template == "oeis://sequence/{id}"
    assert resolver.mime_type == "application/json"


@pytest.mark.asyncio
async def test_read(resolver):
    payload = json.loads(await resolver.read("A000045"))

    assert payload["id"] == "A000045"
    assert payload["data"][:6] == [1, 1, 2, 3, 5, 8]
    assert payload["crossReferences"][0].startswith("Cf. A000032")


@pytest.mark.asyncio
async def test_read_malformed_id_is_invalid_params(resolver, fetcher):
    with pytest.raises(McpError) as exc_info:
        await resolver.read("45")

    assert exc_info.value.error.code == INVALID_PARAMS
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_read_missing_sequence_is_internal_error(resolver):
    with pytest.raises(McpError) as exc_info:
        await resolver.read("A999999")
    assert exc_info.value.error.code == INTERNAL_ERROR


# URI resolution goes through the registry's template table
@pytest.mark.asyncio
async def test_resolve_uri(registry):
    mime_type, content = await registry.dispatch("resource", "oeis://sequence/A000045")

    assert mime_type == "application/json"
    assert json.loads(content)["id"] == "A000045"


@pytest.mark.parametrize("uri", ["invalid://uri", "oeis://sequences/A000045", "oeis://sequence/"])
@pytest.mark.asyncio
async def test_resolve_unknown_uri_is_invalid_params(registry, fetcher, uri):
    with pytest.raises(McpError) as exc_info:
        await registry.dispatch("resource", uri)

    assert exc_info.value.error.code == INVALID_PARAMS
    assert "oeis://sequence/{id}" in exc_info.value.error.message
    assert fetcher.calls == []

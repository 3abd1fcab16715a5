import json
import logging

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError
from mcp import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS

from oeis_mcp.errors import GENERIC_INTERNAL_MESSAGE, UpstreamUnavailable
from oeis_mcp.server import SERVER_NAME, create_server


@pytest.fixture
def server(fetcher):
    return create_server(fetcher=fetcher)


@pytest.mark.asyncio
async def test_capability_discovery(server, fetcher):
    async with Client(server) as client:
        tools = await client.list_tools()
        prompts = await client.list_prompts()
        templates = await client.list_resource_templates()

    assert sorted(t.name for t in tools) == ["find_by_id", "get_url", "search_by_subsequence"]
    assert [p.name for p in prompts] == ["sequence_analysis"]
    assert [t.uriTemplate for t in templates] == ["oeis://sequence/{id}"]
    assert templates[0].mimeType == "application/json"
    assert fetcher.calls == []


def test_server_name(server):
    assert server.name == SERVER_NAME


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_call_find_by_id(server):
    async with Client(server) as client:
        result = await client.call_tool("find_by_id", {"id": "A000045"})

    assert result.structured_content["result"]["id"] == "A000045"
    assert result.structured_content["result"]["data"][:5] == [1, 1, 2, 3, 5]
    assert result.content[0].text.startswith("# OEIS Sequence A000045")


@pytest.mark.asyncio
async def test_call_search_by_subsequence(server):
    async with Client(server) as client:
        result = await client.call_tool("search_by_subsequence", {"subsequence": [1, 1, 2]})

    assert [r["id"] for r in result.structured_content["results"]] == ["A000045", "A000108"]


# tool failures arrive as isError results carrying the translated message
@pytest.mark.asyncio
async def test_call_with_bad_id_reports_invalid_id_detail(server, fetcher):
    async with Client(server) as client:
        with pytest.raises(ToolError) as exc_info:
            await client.call_tool("find_by_id", {"id": "45"})

    assert str(exc_info.value).startswith("Invalid sequence id '45'")
    assert "A000045" in str(exc_info.value)
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_call_missing_sequence_reports_generic_message(server):
    async with Client(server) as client:
        with pytest.raises(ToolError) as exc_info:
            await client.call_tool("find_by_id", {"id": "A999999"})

    assert str(exc_info.value) == "No matching sequence was found in the OEIS database"


@pytest.mark.asyncio
async def test_call_upstream_failure_hides_detail(server, fetcher):
    fetcher.fail("id:A000045", UpstreamUnavailable("OEIS returned HTTP 503 (q=id:A000045)"))

    async with Client(server) as client:
        with pytest.raises(ToolError) as exc_info:
            await client.call_tool("find_by_id", {"id": "A000045"})

    assert str(exc_info.value) == "The OEIS database is currently unavailable"


@pytest.mark.asyncio
async def test_call_unknown_tool_and_bad_arguments(server, fetcher):
    async with Client(server) as client:
        with pytest.raises(ToolError, match="Unknown tool: delete_sequence"):
            await client.call_tool("delete_sequence", {})
        with pytest.raises(ToolError, match="Argument validation failed for search_by_subsequence"):
            await client.call_tool("search_by_subsequence", {"subsequence": "1,2,3"})
        with pytest.raises(ToolError, match="at least one integer"):
            await client.call_tool("search_by_subsequence", {"subsequence": []})

    assert fetcher.calls == []


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_read_sequence_resource(server):
    async with Client(server) as client:
        contents = await client.read_resource("oeis://sequence/A000045")

    assert contents[0].mimeType == "application/json"
    assert json.loads(contents[0].text)["id"] == "A000045"


@pytest.mark.asyncio
async def test_read_unknown_uri_is_invalid_params(server):
    async with Client(server) as client:
        with pytest.raises(McpError) as exc_info:
            await client.read_resource("invalid://uri")

    assert exc_info.value.error.code == INVALID_PARAMS
    assert "oeis://sequence/{id}" in exc_info.value.error.message


@pytest.mark.asyncio
async def test_read_bad_id_is_invalid_params(server, fetcher):
    async with Client(server) as client:
        with pytest.raises(McpError) as exc_info:
            await client.read_resource("oeis://sequence/45")

    assert exc_info.value.error.code == INVALID_PARAMS
    assert "Invalid sequence id '45'" in exc_info.value.error.message
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_read_missing_sequence_is_internal_error(server):
    async with Client(server) as client:
        with pytest.raises(McpError) as exc_info:
            await client.read_resource("oeis://sequence/A999999")

    assert exc_info.value.error.code == INTERNAL_ERROR
    assert exc_info.value.error.message == "No matching sequence was found in the OEIS database"


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_sequence_analysis_prompt(server):
    async with Client(server) as client:
        result = await client.get_prompt("sequence_analysis", {"sequence_id": "A000045"})

    assert [m.role for m in result.messages] == ["user", "assistant"]
    assert "comprehensive analysis" in result.messages[0].content.text
    assert "1, 1, 2, 3, 5, 8" in result.messages[1].content.text


@pytest.mark.asyncio
async def test_prompt_bad_id_is_invalid_params(server, fetcher):
    async with Client(server) as client:
        with pytest.raises(McpError) as exc_info:
            await client.get_prompt("sequence_analysis", {"sequence_id": "bad"})

    assert exc_info.value.error.code == INVALID_PARAMS
    assert "Invalid sequence id 'bad'" in exc_info.value.error.message
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_prompt_missing_argument_is_invalid_params(server):
    async with Client(server) as client:
        with pytest.raises(McpError) as exc_info:
            await client.get_prompt("sequence_analysis", {})

    assert exc_info.value.error.code == INVALID_PARAMS
    assert "sequence_id" in exc_info.value.error.message


@pytest.mark.asyncio
async def test_prompt_upstream_failure_is_internal_error(server, fetcher):
    fetcher.fail("id:A000045", RuntimeError("socket exploded"))

    async with Client(server) as client:
        with pytest.raises(McpError) as exc_info:
            await client.get_prompt("sequence_analysis", {"sequence_id": "A000045"})

    assert exc_info.value.error.code == INTERNAL_ERROR
    assert exc_info.value.error.message == GENERIC_INTERNAL_MESSAGE


@pytest.mark.asyncio
async def test_unknown_prompt_is_invalid_params(server):
    async with Client(server) as client:
        with pytest.raises(McpError) as exc_info:
            await client.get_prompt("find_by_id", {})

    assert exc_info.value.error.code == INVALID_PARAMS


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_requests_are_logged(server, caplog):
    with caplog.at_level(logging.INFO, logger="oeis_mcp.middleware.request_logging"):
        async with Client(server) as client:
            await client.call_tool("get_url", {})

    assert "tool get_url completed" in caplog.text

import pytest
from mcp import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS

from oeis_mcp.errors import UpstreamUnavailable
from oeis_mcp.prompts.sequence_analysis import SequencePrompts, build_user_message


@pytest.fixture
def prompts(fetcher):
    return SequencePrompts(fetcher)


@pytest.mark.asyncio
async def test_sequence_analysis_messages(prompts):
    messages = await prompts.sequence_analysis("A000045")

    assert [m.role for m in messages] == ["user", "assistant"]

    request = messages[0].content.text
    assert "comprehensive analysis" in request
    assert "A000045" in request
    assert "5. Interesting facts or observations" in request

    seeded = messages[1].content.text
    assert "Fibonacci numbers" in seeded
    assert "A000045" in seeded
    assert "1, 1, 2, 3, 5, 8" in seeded


@pytest.mark.asyncio
async def test_sequence_analysis_normalizes_id(prompts, fetcher):
    messages = await prompts.sequence_analysis("a000045")

    assert "A000045" in messages[0].content.text
    assert fetcher.calls == ["id:A000045"]


@pytest.mark.asyncio
async def test_sequence_analysis_bad_id(prompts, fetcher):
    with pytest.raises(McpError) as exc_info:
        await prompts.sequence_analysis("fibonacci")

    assert exc_info.value.error.code == INVALID_PARAMS
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_sequence_analysis_upstream_failure(prompts, fetcher):
    fetcher.fail("id:A000045", UpstreamUnavailable("connection refused"))

    with pytest.raises(McpError) as exc_info:
        await prompts.sequence_analysis("A000045")
    assert exc_info.value.error.code == INTERNAL_ERROR


def test_user_message_template():
    message = build_user_message("A000108")
    assert message.content.text.startswith(
        "Please provide a comprehensive analysis of OEIS sequence A000108. Include:"
    )

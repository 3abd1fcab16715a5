# SPDX-License-Identifier: MIT
#
# oeis_mcp/server.py
# =============================================================================
# FastMCP server for the On-Line Encyclopedia of Integer Sequences
#   • get_url   • find_by_id   • search_by_subsequence      (tools)
#   • sequence_analysis                                      (prompt)
#   • oeis://sequence/{id}                                   (resource template)
# =============================================================================
"""
OEIS MCP Server
===============

Builds the FastMCP server around one shared ``SequenceFetcher`` and one
read-only ``CapabilityRegistry``, and serves it over streamable HTTP at
``/mcp``.
"""

import asyncio
import logging
import sys
from typing import Optional

from fastmcp import FastMCP

from .config import ServerSettings
from .middleware.error_translation import ErrorTranslationMiddleware
from .middleware.request_logging import RequestLoggingMiddleware
from .registry import build_registry
from .services.oeis_client import OEISClient, SequenceFetcher

logger = logging.getLogger(__name__)

SERVER_NAME = "oeis-mcp-server"
MCP_PATH = "/mcp"

INSTRUCTIONS = (
    "This server provides access to the OEIS (On-Line Encyclopedia of Integer Sequences) database. "
    "Tools: get_url (returns the OEIS homepage URL, or an entry URL for a given ID), "
    "find_by_id (look up a sequence by ID like 'A000045'), "
    "search_by_subsequence (find sequences containing terms like [1, 1, 2, 3, 5]). "
    "Prompts: sequence_analysis (comprehensive analysis of an OEIS sequence). "
    "Resources: oeis://sequence/{id} (sequence data as JSON). "
    "Use this server to look up integer sequences, analyze their mathematical properties, "
    "and explore relationships between sequences."
)


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once, to stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )


def create_server(
    settings: Optional[ServerSettings] = None,
    fetcher: Optional[SequenceFetcher] = None,
) -> FastMCP:
    """
    Assemble the FastMCP server.

    Args:
        settings: Server settings; defaults are used when omitted
        fetcher: Shared fetcher; an ``OEISClient`` is created when omitted.
            The caller owns it and closes it on shutdown.

    Returns:
        FastMCP server with every capability registered
    """
    settings = settings or ServerSettings()
    if fetcher is None:
        fetcher = OEISClient(settings.base_url, settings.timeout)

    registry = build_registry(fetcher, settings.base_url)

    # ── FastMCP server object ------------------------------------------------
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    # ── Middleware Registration ----------------------------------------------
    # First added runs outermost: logging sees the translated error
    mcp.add_middleware(RequestLoggingMiddleware())
    mcp.add_middleware(ErrorTranslationMiddleware(registry))

    # ── Capability Registration ----------------------------------------------
    # Every tool, prompt and resource template comes from the one registry;
    # FastMCP only receives references to its handlers.
    registry.bind(mcp)
    logger.debug(f"Server assembled: {registry!r}")
    return mcp


async def serve(settings: ServerSettings) -> None:
    """Run the HTTP transport until cancelled, then close the upstream client."""
    fetcher = OEISClient(settings.base_url, settings.timeout)
    mcp = create_server(settings, fetcher)
    try:
        await mcp.run_async(
            transport="http",
            host=settings.host,
            port=settings.port,
            path=MCP_PATH,
        )
    finally:
        await fetcher.aclose()


def main() -> None:
    """Entry point for the oeis-mcp-server console script."""
    settings = ServerSettings.from_env()
    setup_logging(settings.log_level)
    logger.info(f"Starting OEIS MCP server at http://{settings.host}:{settings.port}{MCP_PATH}")
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("OEIS MCP server stopped")


if __name__ == "__main__":
    main()

# SPDX-License-Identifier: MIT

# oeis_mcp/__init__.py
"""
Public API surface for the OEIS MCP server package.

    from oeis_mcp import create_server
    mcp = create_server()

Capabilities exposed:
    - Tools: get_url, find_by_id, search_by_subsequence
    - Prompts: sequence_analysis
    - Resources: oeis://sequence/{id}
"""

from .config import ServerSettings
from .errors import (
    CapabilityNotFound,
    InvalidParams,
    SequenceError,
    SequenceNotFound,
    SequenceParseError,
    UpstreamUnavailable,
    translate,
)
from .registry import CapabilityKind, CapabilityRegistry, build_registry
from .schema.common import Sequence
from .server import create_server, main
from .services.oeis_client import OEISClient, SequenceFetcher
from .services.parser import parse

__version__ = "0.1.0"

__all__ = [
    "CapabilityKind",
    "CapabilityNotFound",
    "CapabilityRegistry",
    "InvalidParams",
    "OEISClient",
    "Sequence",
    "SequenceError",
    "SequenceFetcher",
    "SequenceNotFound",
    "SequenceParseError",
    "ServerSettings",
    "UpstreamUnavailable",
    "build_registry",
    "create_server",
    "main",
    "parse",
    "translate",
]

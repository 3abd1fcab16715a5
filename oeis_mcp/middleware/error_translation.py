# SPDX-License-Identifier: MIT

# middleware/error_translation.py
"""
Boundary error translation middleware.

FastMCP wraps handler failures in its own ToolError / PromptError /
ResourceError and would report them with code 0. This middleware
validates each request against the capability registry before FastMCP
sees it, then unwraps any failure to the error this package raised and
re-raises it as ``McpError`` with INVALID_PARAMS or INTERNAL_ERROR.

Prompt and resource failures reach the client as JSON-RPC errors with
that code. Tool failures are always returned as ``isError`` results by
the MCP server layer, so for tools the translated message is what the
client sees.
"""

import logging
from typing import Any, Mapping, Optional

from fastmcp.exceptions import NotFoundError
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from mcp import McpError

from ..errors import CapabilityNotFound, SequenceError, translate, translate_errors
from ..registry import CapabilityKind, CapabilityRegistry

logger = logging.getLogger(__name__)


def find_origin(exc: BaseException) -> BaseException:
    """
    Walk the cause/context chain to the error this package raised.

    Returns the first ``McpError`` or ``SequenceError`` found, a
    ``CapabilityNotFound`` for FastMCP's own not-found errors, or ``exc``
    itself when the chain holds neither.
    """
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, (McpError, SequenceError)):
            return current
        if isinstance(current, NotFoundError):
            return CapabilityNotFound(str(current))
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return exc


class ErrorTranslationMiddleware(Middleware):
    """Rejects malformed requests early and normalises every failure code."""

    def __init__(self, registry: CapabilityRegistry):
        self.registry = registry

    async def on_call_tool(self, context: MiddlewareContext, call_next: CallNext):
        message = context.message
        return await self._guarded(CapabilityKind.TOOL, message.name, message.arguments, context, call_next)

    async def on_get_prompt(self, context: MiddlewareContext, call_next: CallNext):
        message = context.message
        return await self._guarded(CapabilityKind.PROMPT, message.name, message.arguments, context, call_next)

    async def on_read_resource(self, context: MiddlewareContext, call_next: CallNext):
        return await self._guarded(CapabilityKind.RESOURCE, str(context.message.uri), None, context, call_next)

    async def _guarded(
        self,
        kind: CapabilityKind,
        name: str,
        arguments: Optional[Mapping[str, Any]],
        context: MiddlewareContext,
        call_next: CallNext,
    ):
        # unknown capabilities and bad arguments never reach FastMCP
        with translate_errors(f"{kind.value} {name}"):
            self.registry.prepare(kind, name, arguments)

        try:
            return await call_next(context)
        except Exception as e:
            origin = find_origin(e)
            if not isinstance(origin, (McpError, SequenceError)):
                logger.exception(f"{kind.value} {name} failed unexpectedly: {e}")
            raise McpError(translate(origin).error) from e

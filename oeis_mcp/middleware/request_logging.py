# SPDX-License-Identifier: MIT

# middleware/request_logging.py
"""
Request logging middleware.

Logs every tool call, prompt render and resource read with its duration
and outcome. It observes only; errors are re-raised unchanged.
"""

import logging
import time

from fastmcp.server.middleware import Middleware, MiddlewareContext

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(Middleware):
    """Per-capability timing and outcome logging."""

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        return await self._timed(f"tool {context.message.name}", context, call_next)

    async def on_get_prompt(self, context: MiddlewareContext, call_next):
        return await self._timed(f"prompt {context.message.name}", context, call_next)

    async def on_read_resource(self, context: MiddlewareContext, call_next):
        return await self._timed(f"resource {context.message.uri}", context, call_next)

    async def _timed(self, label: str, context: MiddlewareContext, call_next):
        start_time = time.perf_counter()
        try:
            result = await call_next(context)
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.info(f"{label} failed after {duration * 1000:.1f} ms: {e}")
            raise
        duration = time.perf_counter() - start_time
        logger.info(f"{label} completed in {duration * 1000:.1f} ms")
        return result

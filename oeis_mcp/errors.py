# SPDX-License-Identifier: MIT

# errors.py
"""
Error taxonomy and boundary translation.

Components raise the internal exceptions below. ``translate`` is the only
place an ``McpError`` is built from them, and ``translate_errors`` is the
context manager every capability handler runs inside, so nothing but the
two boundary codes (invalid params / internal error) ever reaches a client.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Type

from mcp import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, ErrorData

logger = logging.getLogger(__name__)


class SequenceError(Exception):
    """Base class for every failure raised inside the capability layer."""


class InvalidParams(SequenceError):
    """Caller input is malformed (bad id, empty or non-integer terms)."""


class CapabilityNotFound(SequenceError):
    """No tool, prompt or resource template matches the request."""


class SequenceNotFound(SequenceError):
    """The upstream database returned zero hits for a well-formed query."""


class UpstreamUnavailable(SequenceError):
    """Transport failure, timeout or non-success status from upstream."""


class SequenceParseError(SequenceError):
    """The upstream payload is structurally corrupt."""


# Fixed mapping: internal error kind -> (boundary code, public message).
# A public message of None means the internal message is safe to expose.
ERROR_TABLE: Dict[Type[SequenceError], tuple] = {
    InvalidParams: (INVALID_PARAMS, None),
    CapabilityNotFound: (INVALID_PARAMS, None),
    SequenceNotFound: (INTERNAL_ERROR, "No matching sequence was found in the OEIS database"),
    UpstreamUnavailable: (INTERNAL_ERROR, "The OEIS database is currently unavailable"),
    SequenceParseError: (INTERNAL_ERROR, "The OEIS database returned an unreadable record"),
}

GENERIC_INTERNAL_MESSAGE = "Internal error while handling the request"


def translate(exc: BaseException) -> McpError:
    """
    Convert an internal failure into the boundary error vocabulary.

    Args:
        exc: Any exception raised while serving a capability

    Returns:
        McpError carrying INVALID_PARAMS or INTERNAL_ERROR
    """
    if isinstance(exc, McpError):
        return exc

    for error_type in type(exc).__mro__:
        if error_type in ERROR_TABLE:
            code, public_message = ERROR_TABLE[error_type]
            return McpError(ErrorData(code=code, message=public_message or str(exc)))

    return McpError(ErrorData(code=INTERNAL_ERROR, message=GENERIC_INTERNAL_MESSAGE))


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """
    Run a capability body and rewrite any failure at the boundary.

    Expected failures are logged at WARNING with their full detail;
    anything unexpected is logged with its traceback. Cancellation is a
    BaseException and passes through untouched.
    """
    try:
        yield
    except McpError:
        raise
    except SequenceError as e:
        logger.warning(f"{operation} failed with {type(e).__name__}: {e}")
        raise translate(e) from e
    except Exception as e:
        logger.exception(f"{operation} failed unexpectedly: {e}")
        raise translate(e) from e

# SPDX-License-Identifier: MIT

"""
Capability Registry for the OEIS MCP Server
===========================================

An explicit, read-only table of every tool, prompt and resource template
the server exposes. It is built once at startup by ``build_registry`` and
passed by reference to whatever serves requests:

1. ``list()`` answers capability discovery without any I/O
2. ``prepare()`` resolves a descriptor by name (tools, prompts) or by
   URI-template match (resources) and validates the arguments against the
   descriptor's input model; the boundary middleware runs it on every
   request before FastMCP does
3. ``dispatch()`` is ``prepare()`` plus awaiting the handler
4. ``bind()`` registers the same descriptors with a FastMCP server, so the
   HTTP transport and direct dispatch share one set of handlers

``prepare()`` raises the internal errors; ``dispatch()`` failures leave
through ``translate_errors`` as ``McpError``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Awaitable, Callable, ClassVar, Dict, Iterable, Mapping, Optional, Tuple, Type, Union

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import BaseModel, ValidationError

from .errors import CapabilityNotFound, InvalidParams, translate_errors
from .prompts.sequence_analysis import SequencePrompts
from .resources.sequence_resource import SequenceResourceResolver, template_to_regex
from .schema.inputs import (
    FindByIdInput,
    GetUrlInput,
    SearchBySubsequenceInput,
    SequenceAnalysisInput,
    SequenceResourceInput,
)
from .services.oeis_client import DEFAULT_BASE_URL, SequenceFetcher
from .tools.sequence_tools import SequenceTools

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[Any]]


class CapabilityKind(str, Enum):
    """The three invocation shapes exposed at the boundary."""

    TOOL = "tool"
    PROMPT = "prompt"
    RESOURCE = "resource"


# =====================================================================
# DESCRIPTORS
# =====================================================================

@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Handler
    annotations: Mapping[str, Any] = field(default_factory=dict)

    kind: ClassVar[CapabilityKind] = CapabilityKind.TOOL

    @property
    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class PromptDescriptor:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Handler

    kind: ClassVar[CapabilityKind] = CapabilityKind.PROMPT

    @property
    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class ResourceTemplateDescriptor:
    uri_template: str
    name: str
    description: str
    mime_type: str
    input_model: Type[BaseModel]
    handler: Handler

    kind: ClassVar[CapabilityKind] = CapabilityKind.RESOURCE

    @property
    def key(self) -> str:
        return self.uri_template

    def match(self, uri: str) -> Optional[Dict[str, str]]:
        """Template variables for ``uri``, or None if it does not match."""
        found = template_to_regex(self.uri_template).match(uri)
        return found.groupdict() if found else None


Descriptor = Union[ToolDescriptor, PromptDescriptor, ResourceTemplateDescriptor]


# =====================================================================
# REGISTRY / ROUTER
# =====================================================================

class CapabilityRegistry:
    """Immutable capability table plus the dispatch logic over it."""

    def __init__(
        self,
        tools: Iterable[ToolDescriptor] = (),
        prompts: Iterable[PromptDescriptor] = (),
        resource_templates: Iterable[ResourceTemplateDescriptor] = (),
    ):
        self._tables: Mapping[CapabilityKind, Mapping[str, Descriptor]] = MappingProxyType({
            CapabilityKind.TOOL: self._index(tools),
            CapabilityKind.PROMPT: self._index(prompts),
            CapabilityKind.RESOURCE: self._index(resource_templates),
        })

    @staticmethod
    def _index(descriptors: Iterable[Descriptor]) -> Mapping[str, Descriptor]:
        table: Dict[str, Descriptor] = {}
        for descriptor in descriptors:
            if descriptor.key in table:
                raise ValueError(f"Duplicate {descriptor.kind.value} registration: {descriptor.key}")
            table[descriptor.key] = descriptor
        return MappingProxyType(table)

    def list(self, kind: Union[CapabilityKind, str]) -> Tuple[Descriptor, ...]:
        """All descriptors of one kind, in registration order."""
        return tuple(self._tables[CapabilityKind(kind)].values())

    def lookup(self, kind: Union[CapabilityKind, str], name: str) -> Tuple[Descriptor, Dict[str, str]]:
        """
        Resolve a descriptor and any URI-template variables.

        Raises:
            CapabilityNotFound: Unknown kind, name, or unmatched URI
        """
        try:
            kind = CapabilityKind(kind)
        except ValueError:
            raise CapabilityNotFound(f"Unknown capability kind: {kind!r}") from None

        if kind is CapabilityKind.RESOURCE:
            for descriptor in self._tables[kind].values():
                variables = descriptor.match(name)
                if variables is not None:
                    return descriptor, variables
            templates = ", ".join(self._tables[kind])
            raise CapabilityNotFound(f"Invalid resource URI: {name}. Expected format: {templates}")

        descriptor = self._tables[kind].get(name)
        if descriptor is None:
            raise CapabilityNotFound(f"Unknown {kind.value}: {name}")
        return descriptor, {}

    def prepare(
        self,
        kind: Union[CapabilityKind, str],
        name: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[Descriptor, Dict[str, Any]]:
        """
        Resolve a descriptor and validate the call arguments against it.

        Raises:
            CapabilityNotFound: Nothing matches ``kind``/``name``
            InvalidParams: Arguments do not fit the input model
        """
        descriptor, variables = self.lookup(kind, name)
        return descriptor, self._validate(descriptor, {**(params or {}), **variables})

    async def dispatch(
        self,
        kind: Union[CapabilityKind, str],
        name: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Invoke one capability.

        Returns:
            ToolResult for tools, list[PromptMessage] for prompts and
            (mime_type, content) for resources

        Raises:
            McpError: INVALID_PARAMS or INTERNAL_ERROR, nothing else
        """
        with translate_errors(f"dispatch {kind} {name}"):
            descriptor, arguments = self.prepare(kind, name, params)

        # handlers translate their own failures
        result = await descriptor.handler(**arguments)
        if descriptor.kind is CapabilityKind.RESOURCE:
            return descriptor.mime_type, result
        return result

    @staticmethod
    def _validate(descriptor: Descriptor, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            validated = descriptor.input_model.model_validate(params)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidParams(f"Argument validation failed for {descriptor.key}: {problems}") from e
        return validated.model_dump(exclude_unset=True)

    def bind(self, mcp: FastMCP) -> int:
        """
        Register every descriptor with a FastMCP server.

        Returns:
            int: Number of capabilities registered

        Raises:
            RuntimeError: If FastMCP rejects a registration
        """
        registered_count = 0
        logger.info(f"Starting capability registration for {sum(len(t) for t in self._tables.values())} capabilities")

        for kind in CapabilityKind:
            for descriptor in self.list(kind):
                try:
                    self._bind_one(mcp, descriptor)
                    registered_count += 1
                    logger.debug(f"Registered {kind.value} '{descriptor.key}'")
                except Exception as e:
                    error_msg = f"Failed to register {kind.value} '{descriptor.key}': {str(e)}"
                    logger.error(error_msg)
                    raise RuntimeError(error_msg) from e

        logger.info(f"Successfully registered {registered_count} capabilities")
        return registered_count

    @staticmethod
    def _bind_one(mcp: FastMCP, descriptor: Descriptor) -> None:
        if isinstance(descriptor, ToolDescriptor):
            mcp.tool(
                name=descriptor.name,
                description=descriptor.description,
                annotations=ToolAnnotations(**descriptor.annotations),
            )(descriptor.handler)
        elif isinstance(descriptor, PromptDescriptor):
            mcp.prompt(
                name=descriptor.name,
                description=descriptor.description,
            )(descriptor.handler)
        else:
            mcp.resource(
                descriptor.uri_template,
                name=descriptor.name,
                description=descriptor.description,
                mime_type=descriptor.mime_type,
            )(descriptor.handler)

    def __repr__(self) -> str:
        return (
            f"CapabilityRegistry(tools={len(self._tables[CapabilityKind.TOOL])}, "
            f"prompts={len(self._tables[CapabilityKind.PROMPT])}, "
            f"resource_templates={len(self._tables[CapabilityKind.RESOURCE])})"
        )


# =====================================================================
# STARTUP TABLE
# =====================================================================

# All tools are read-only lookups against an external database
READ_ONLY_LOOKUP = {
    "readOnlyHint": True,
    "idempotentHint": True,
    "openWorldHint": True,
}


def build_registry(fetcher: SequenceFetcher, base_url: str = DEFAULT_BASE_URL) -> CapabilityRegistry:
    """Assemble the process-wide capability table around one shared fetcher."""
    tools = SequenceTools(fetcher, base_url)
    prompts = SequencePrompts(fetcher)
    resolver = SequenceResourceResolver(fetcher)

    return CapabilityRegistry(
        tools=[
            ToolDescriptor(
                "get_url",
                "Get a URL of OEIS entry.",
                GetUrlInput,
                tools.get_url,
                {**READ_ONLY_LOOKUP, "openWorldHint": False},  # no network call
            ),
            ToolDescriptor(
                "find_by_id",
                "Find a sequence by its ID.",
                FindByIdInput,
                tools.find_by_id,
                READ_ONLY_LOOKUP,
            ),
            ToolDescriptor(
                "search_by_subsequence",
                "Search sequences by subsequence.",
                SearchBySubsequenceInput,
                tools.search_by_subsequence,
                READ_ONLY_LOOKUP,
            ),
        ],
        prompts=[
            PromptDescriptor(
                "sequence_analysis",
                "Analyzes an OEIS sequence in detail, providing mathematical context, "
                "patterns, and related sequences",
                SequenceAnalysisInput,
                prompts.sequence_analysis,
            ),
        ],
        resource_templates=[
            ResourceTemplateDescriptor(
                resolver.uri_template,
                "OEIS Sequence",
                "OEIS sequence data by ID (e.g., A000045)",
                resolver.mime_type,
                SequenceResourceInput,
                resolver.read,
            ),
        ],
    )

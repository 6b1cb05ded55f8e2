"""Capability registry and dispatcher.

Holds three independent name-keyed tables (tools, resources, prompts), validates
invocation arguments against each tool's declared shape and shapes results and
failures into MCP response types. Tools report failures as flagged results;
resource reads and prompt renders raise.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import pydantic
from mcp.types import (
    CallToolResult,
    GetPromptResult,
    PromptMessage,
    ResourceLink,
    TextContent,
    TextResourceContents,
)

from .errors import MCPError, NotFoundError, OpsGenieMCPError, ValidationError
from .uri_templates import UriTemplate

logger = logging.getLogger(__name__)

JsonDocument = Any


@dataclass
class OperationOutcome:
    """What a tool handler returns: a text summary plus optional resource links."""

    text: str
    links: list[ResourceLink] = field(default_factory=list)

    def to_result(self) -> CallToolResult:
        content: list[Any] = [TextContent(type="text", text=self.text)]
        content.extend(self.links)
        return CallToolResult(content=content, isError=False)


OperationHandler = Callable[[Any], Awaitable[OperationOutcome]]
ResourceHandler = Callable[[Mapping[str, str]], Awaitable[JsonDocument]]
PromptRenderer = Callable[[Mapping[str, str]], str]


@dataclass(frozen=True)
class OperationDef:
    name: str
    title: str
    description: str
    arguments: type[pydantic.BaseModel]
    handler: OperationHandler
    error_context: str

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.arguments.model_json_schema(by_alias=True)

    def validate(self, arguments: Mapping[str, Any] | None) -> pydantic.BaseModel:
        try:
            return self.arguments.model_validate(dict(arguments or {}))
        except pydantic.ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'arguments'}: {error['msg']}"
                for error in e.errors()
            )
            raise ValidationError(f"Invalid arguments for {self.name}: {problems}") from e


@dataclass(frozen=True)
class ResourceDef:
    name: str
    uri_template: UriTemplate
    title: str
    description: str
    handler: ResourceHandler
    mime_type: str = "application/json"


@dataclass(frozen=True)
class PromptArgumentDef:
    name: str
    description: str
    required: bool = True
    default: str | None = None


@dataclass(frozen=True)
class PromptDef:
    name: str
    title: str
    description: str
    arguments: tuple[PromptArgumentDef, ...]
    render: PromptRenderer


class CapabilityRegistry:
    """Process-wide registry, populated once at startup and read-only afterwards."""

    def __init__(self):
        self._operations: dict[str, OperationDef] = {}
        self._resources: dict[str, ResourceDef] = {}
        self._prompts: dict[str, PromptDef] = {}
        self._frozen = False

    # Registration

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("Capability registry is frozen; register capabilities at startup")

    def add_operation(self, definition: OperationDef) -> OperationDef:
        self._check_mutable()
        if definition.name in self._operations:
            logger.debug(f"Replacing tool registration: {definition.name}")
        self._operations[definition.name] = definition
        return definition

    def add_resource(self, definition: ResourceDef) -> ResourceDef:
        self._check_mutable()
        if definition.name in self._resources:
            logger.debug(f"Replacing resource registration: {definition.name}")
        self._resources[definition.name] = definition
        return definition

    def add_prompt(self, definition: PromptDef) -> PromptDef:
        self._check_mutable()
        if definition.name in self._prompts:
            logger.debug(f"Replacing prompt registration: {definition.name}")
        self._prompts[definition.name] = definition
        return definition

    def freeze(self) -> None:
        self._frozen = True
        logger.info(
            f"Capability registry ready: {len(self._operations)} tools, "
            f"{len(self._resources)} resources, {len(self._prompts)} prompts"
        )

    def operations(self) -> list[OperationDef]:
        return list(self._operations.values())

    def resources(self) -> list[ResourceDef]:
        return list(self._resources.values())

    def prompts(self) -> list[PromptDef]:
        return list(self._prompts.values())

    # Tools

    async def call_operation(
        self, name: str, arguments: Mapping[str, Any] | None = None
    ) -> CallToolResult:
        """Validate arguments, run the tool handler and wrap the outcome.

        Never raises: every failure becomes a result with ``isError=True``.
        """
        definition = self._operations.get(name)
        if definition is None:
            return MCPError.tool_error(f"calling {name}", NotFoundError(f"Unknown tool: {name}"))

        try:
            args = definition.validate(arguments)
            outcome = await definition.handler(args)
        except OpsGenieMCPError as e:
            logger.warning(f"Tool {name} failed ({e.error_type}): {e.message}")
            return MCPError.tool_error(definition.error_context, e)
        except Exception as e:
            logger.exception(f"Unexpected error in tool {name}")
            return MCPError.tool_error(definition.error_context, e)

        return outcome.to_result()

    # Resources

    def resolve_resource(self, uri: str) -> tuple[ResourceDef, dict[str, str | None]]:
        """Find the resource bound to ``uri``; static URIs win over templates."""
        for definition in self._resources.values():
            if definition.uri_template.is_static and definition.uri_template.match(uri) is not None:
                return definition, {}
        for definition in self._resources.values():
            if definition.uri_template.is_static:
                continue
            params = definition.uri_template.match(uri)
            if params is not None:
                return definition, params
        raise NotFoundError(f"Unknown resource: {uri}")

    async def read_resource(self, uri: str) -> TextResourceContents:
        """Read a resource. Failures propagate to the caller."""
        definition, params = self.resolve_resource(uri)
        for name in definition.uri_template.variables:
            if not params.get(name):
                raise NotFoundError(f"{name} is required to read {definition.name}")

        logger.debug(f"Reading resource {definition.name}: {uri}")
        document = await definition.handler({key: value for key, value in params.items() if value})
        return TextResourceContents(
            uri=uri,
            mimeType=definition.mime_type,
            text=json.dumps(document, indent=2),
        )

    # Prompts

    def get_prompt(self, name: str, arguments: Mapping[str, Any] | None = None) -> GetPromptResult:
        definition = self._prompts.get(name)
        if definition is None:
            raise NotFoundError(f"Unknown prompt: {name}")

        supplied = dict(arguments or {})
        values: dict[str, str] = {}
        for argument in definition.arguments:
            value = supplied.get(argument.name)
            if value is None or not str(value).strip():
                if argument.required:
                    raise ValidationError(
                        f"Missing required argument '{argument.name}' for prompt {name}"
                    )
                if argument.default is None:
                    continue
                value = argument.default
            values[argument.name] = str(value)

        return GetPromptResult(
            description=definition.description,
            messages=[
                PromptMessage(
                    role="user",
                    content=TextContent(type="text", text=definition.render(values)),
                )
            ],
        )

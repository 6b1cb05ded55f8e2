"""
OpsGenie MCP Server - A Model Context Protocol server for OpsGenie alert management.

This module assembles the capability registry (tools, resources and prompts
backed by the OpsGenie alert API) and publishes it through a FastMCP server.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import PromptError, ResourceError, ToolError
from fastmcp.prompts.prompt import Prompt, PromptArgument
from fastmcp.resources.resource import Resource
from fastmcp.resources.template import ResourceTemplate
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import PromptMessage, ToolAnnotations
from pydantic import Field

from .alerts import AlertOperations
from .client import DEFAULT_TIMEOUT, OpsGenieClient
from .errors import OpsGenieMCPError
from .registry import CapabilityRegistry, OperationDef, PromptDef, ResourceDef
from .server_defaults import DEFAULT_SERVER_NAME
from .tools import register_alert_tools, register_prompts, register_resource_handlers

# Set up logger
logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "Tools, resources and prompts for OpsGenie alert management. "
    "Alert identifiers are full alert IDs. Search queries use OpsGenie query syntax "
    "(e.g. 'status:open AND priority:P1')."
)


class RegistryTool(Tool):
    """FastMCP tool that dispatches to the capability registry."""

    registry: Any = Field(exclude=True)

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        result = await self.registry.call_operation(self.name, arguments)
        if result.isError:
            raise ToolError(result.content[0].text)
        return ToolResult(content=result.content)


class RegistryResource(Resource):
    """FastMCP static resource read through the capability registry."""

    registry: Any = Field(exclude=True)

    async def read(self) -> str:
        try:
            contents = await self.registry.read_resource(str(self.uri))
        except OpsGenieMCPError as e:
            raise ResourceError(f"Failed to read {self.name}: {e.message}") from e
        return contents.text


class RegistryResourceTemplate(ResourceTemplate):
    """FastMCP resource template read through the capability registry."""

    registry: Any = Field(exclude=True)

    async def create_resource(self, uri: str, params: dict[str, Any]) -> Resource:
        # the registry re-resolves the requested URI; values are decoded exactly once
        return RegistryResource(
            uri=uri,
            name=self.name,
            description=self.description,
            mime_type=self.mime_type,
            tags=self.tags,
            registry=self.registry,
        )


class RegistryPrompt(Prompt):
    """FastMCP prompt rendered by the capability registry."""

    registry: Any = Field(exclude=True)

    async def render(self, arguments: dict[str, Any] | None = None) -> list[PromptMessage]:
        try:
            result = self.registry.get_prompt(self.name, arguments)
        except OpsGenieMCPError as e:
            raise PromptError(e.message) from e
        return list(result.messages)


def _tool_from_definition(registry: CapabilityRegistry, definition: OperationDef) -> Tool:
    return RegistryTool(
        name=definition.name,
        description=definition.description,
        parameters=definition.input_schema,
        annotations=ToolAnnotations(title=definition.title),
        tags={"opsgenie", "alerts"},
        registry=registry,
    )


def _resource_from_definition(
    registry: CapabilityRegistry, definition: ResourceDef
) -> Resource | ResourceTemplate:
    if definition.uri_template.is_static:
        return RegistryResource(
            uri=definition.uri_template.template,
            name=definition.name,
            description=definition.description,
            mime_type=definition.mime_type,
            tags={"opsgenie", "alerts"},
            registry=registry,
        )
    return RegistryResourceTemplate(
        uri_template=definition.uri_template.rfc6570,
        name=definition.name,
        description=definition.description,
        mime_type=definition.mime_type,
        parameters={
            "type": "object",
            "properties": {
                name: {"type": "string"} for name in definition.uri_template.variables
            },
            "required": definition.uri_template.path_variables,
        },
        tags={"opsgenie", "alerts"},
        registry=registry,
    )


def _prompt_from_definition(registry: CapabilityRegistry, definition: PromptDef) -> Prompt:
    return RegistryPrompt(
        name=definition.name,
        description=definition.description,
        arguments=[
            PromptArgument(
                name=argument.name,
                description=argument.description,
                required=argument.required,
            )
            for argument in definition.arguments
        ],
        tags={"opsgenie", "incident-management"},
        registry=registry,
    )


def build_registry(operations: AlertOperations) -> CapabilityRegistry:
    """Register every tool, resource and prompt and freeze the registry."""
    registry = CapabilityRegistry()
    register_alert_tools(registry, operations)
    register_resource_handlers(registry, operations)
    register_prompts(registry)
    registry.freeze()
    return registry


def bind_registry(mcp: FastMCP, registry: CapabilityRegistry) -> FastMCP:
    """Publish the registry's three namespaces on a FastMCP server."""
    for operation in registry.operations():
        mcp.add_tool(_tool_from_definition(registry, operation))
    for resource in registry.resources():
        component = _resource_from_definition(registry, resource)
        if isinstance(component, ResourceTemplate):
            mcp.add_template(component)
        else:
            mcp.add_resource(component)
    for prompt in registry.prompts():
        mcp.add_prompt(_prompt_from_definition(registry, prompt))
    return mcp


def create_opsgenie_mcp_server(
    api_key: str | None = None,
    base_url: str | None = None,
    name: str = DEFAULT_SERVER_NAME,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastMCP:
    """
    Create an OpsGenie MCP Server.

    Args:
        api_key: OpsGenie API key. Falls back to OPSGENIE_API_KEY.
        base_url: API base URL. Falls back to OPSGENIE_BASE_URL, then https://api.opsgenie.com.
        name: Name of the MCP server.
        timeout: HTTP timeout in seconds for OpsGenie API calls.
        transport: Optional httpx transport, used by tests to stub the remote API.

    Returns:
        A FastMCP server instance.

    Raises:
        ConfigurationError: no API key is available.
    """
    client = OpsGenieClient(
        api_key=api_key or os.getenv("OPSGENIE_API_KEY", ""),
        base_url=base_url or os.getenv("OPSGENIE_BASE_URL"),
        timeout=timeout,
        transport=transport,
    )
    registry = build_registry(AlertOperations(client))

    mcp = FastMCP(name=name, instructions=SERVER_INSTRUCTIONS)
    bind_registry(mcp, registry)

    logger.info(f"Created OpsGenie MCP Server '{name}' for {client.base_url}")
    return mcp

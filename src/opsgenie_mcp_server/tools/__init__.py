"""Capability registration modules for the OpsGenie MCP server."""

from .alerts import register_alert_tools
from .prompts import register_prompts
from .resources import register_resource_handlers

__all__ = [
    "register_alert_tools",
    "register_prompts",
    "register_resource_handlers",
]

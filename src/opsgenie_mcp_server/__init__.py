"""
OpsGenie MCP Server - A Model Context Protocol server for OpsGenie alert management.
"""

__version__ = "1.0.1"

from .errors import (
    ConfigurationError,
    NotFoundError,
    OpsGenieMCPError,
    RemoteApiError,
    TransportError,
    ValidationError,
)

__all__ = [
    "__version__",
    "ConfigurationError",
    "NotFoundError",
    "OpsGenieMCPError",
    "RemoteApiError",
    "TransportError",
    "ValidationError",
]

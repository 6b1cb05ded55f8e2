"""Error taxonomy and MCP error envelope helpers for the OpsGenie MCP server."""

from __future__ import annotations

from mcp.types import CallToolResult, TextContent


class OpsGenieMCPError(Exception):
    """Base class for every failure this server raises on purpose."""

    error_type = "execution_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(OpsGenieMCPError):
    """Missing or invalid configuration (e.g. no API key). Fatal at startup."""

    error_type = "configuration_error"


class RemoteApiError(OpsGenieMCPError):
    """The OpsGenie API answered with a non-success status code."""

    def __init__(self, status: int, status_text: str, body_text: str):
        self.status = status
        self.status_text = status_text
        self.body_text = body_text
        super().__init__(f"OpsGenie API error: {status} {status_text} - {body_text}")

    @property
    def error_type(self) -> str:  # type: ignore[override]
        if self.status in (401, 403):
            return "authentication_error"
        if self.status >= 500:
            return "server_error"
        return "client_error"


class TransportError(OpsGenieMCPError):
    """The request never produced an HTTP response (DNS, connect, reset, timeout)."""

    error_type = "network_error"


class ValidationError(OpsGenieMCPError):
    """Invocation arguments or a request body do not match the declared shape."""

    error_type = "validation_error"


class NotFoundError(OpsGenieMCPError):
    """A required path parameter, capability name or resource URI is absent."""

    error_type = "not_found"


class MCPError:
    """Builders for MCP error envelopes."""

    @staticmethod
    def categorize_error(exception: Exception) -> tuple[str, str]:
        """Return the error type tag and the verbatim message for an exception."""
        if isinstance(exception, OpsGenieMCPError):
            return exception.error_type, exception.message
        return "execution_error", str(exception) or type(exception).__name__

    @staticmethod
    def tool_error(context: str, exception: Exception) -> CallToolResult:
        """Create a tool-level error result (flagged, single text block)."""
        _, message = MCPError.categorize_error(exception)
        return CallToolResult(
            content=[TextContent(type="text", text=f"Error {context}: {message}")],
            isError=True,
        )

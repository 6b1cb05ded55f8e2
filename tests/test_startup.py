"""
Tests that verify the MCP server can actually be started.

These tests catch import errors and configuration problems that mocked tests might miss.
"""

import os
from unittest.mock import patch

import pytest


class TestServerStartup:
    """Test actual server startup and import functionality."""

    def test_server_module_imports(self):
        """Test that all server modules can be imported successfully."""
        try:
            from opsgenie_mcp_server import client, registry, server

            assert server is not None
            assert client is not None
            assert registry is not None
        except ImportError as e:
            pytest.fail(f"Failed to import server modules: {e}")

    def test_package_exports(self):
        import opsgenie_mcp_server

        assert opsgenie_mcp_server.__version__
        assert issubclass(opsgenie_mcp_server.RemoteApiError, opsgenie_mcp_server.OpsGenieMCPError)

    def test_get_server_from_environment(self):
        """Test that get_server reads its configuration from the environment."""
        from opsgenie_mcp_server.__main__ import get_server

        env = {
            "OPSGENIE_API_KEY": "test-key",
            "OPSGENIE_BASE_URL": "https://api.eu.opsgenie.com",
            "OPSGENIE_SERVER_NAME": "ops-eu",
            "OPSGENIE_TIMEOUT": "12.5",
        }
        with patch.dict(os.environ, env):
            with patch("opsgenie_mcp_server.__main__.create_opsgenie_mcp_server") as mock_create:
                get_server()

        mock_create.assert_called_once_with(
            api_key="test-key",
            base_url="https://api.eu.opsgenie.com",
            name="ops-eu",
            timeout=12.5,
        )

    def test_get_server_defaults(self):
        from opsgenie_mcp_server.__main__ import get_server

        for key in ("OPSGENIE_BASE_URL", "OPSGENIE_SERVER_NAME", "OPSGENIE_TIMEOUT"):
            os.environ.pop(key, None)
        with patch.dict(os.environ, {"OPSGENIE_API_KEY": "test-key"}):
            with patch("opsgenie_mcp_server.__main__.create_opsgenie_mcp_server") as mock_create:
                get_server()

        kwargs = mock_create.call_args.kwargs
        assert kwargs["name"] == "opsgenie-mcp-server"
        assert kwargs["timeout"] == 30.0
        assert kwargs["base_url"] is None

    def test_invalid_timeout_is_configuration_error(self):
        from opsgenie_mcp_server.__main__ import get_server
        from opsgenie_mcp_server.errors import ConfigurationError

        with patch.dict(os.environ, {"OPSGENIE_API_KEY": "k", "OPSGENIE_TIMEOUT": "soon"}):
            with pytest.raises(ConfigurationError):
                get_server()

    def test_main_exits_without_api_key(self, capsys):
        """Test that startup without credentials exits with status 1."""
        from opsgenie_mcp_server.__main__ import main

        os.environ.pop("OPSGENIE_API_KEY", None)
        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "Error starting OpsGenie MCP Server" in captured.err
        assert "OPSGENIE_API_KEY" in captured.err

    def test_main_runs_server(self):
        from opsgenie_mcp_server.__main__ import main

        with patch("opsgenie_mcp_server.__main__.get_server") as mock_get_server:
            main()

        mock_get_server.return_value.run.assert_called_once_with()

"""Tests for timeweb_mcp/settings.py."""

import pytest

from timeweb_mcp.constants import API_BASE_URL, REQUEST_TIMEOUT
from timeweb_mcp.settings import load_settings
from timeweb_mcp.shared.errors import ConfigError


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings({"TIMEWEB_CLOUD_TOKEN": "tok"})
        assert settings.token == "tok"
        assert settings.base_url == API_BASE_URL
        assert settings.timeout == REQUEST_TIMEOUT
        assert settings.transport == "stdio"
        assert settings.log_level == "INFO"

    def test_missing_token(self):
        with pytest.raises(ConfigError) as exc:
            load_settings({})
        assert "TIMEWEB_CLOUD_TOKEN" in exc.value.message
        assert "https://timeweb.cloud/my/api-keys" in exc.value.message

    def test_overrides(self):
        settings = load_settings({
            "TIMEWEB_CLOUD_TOKEN": "tok",
            "TIMEWEB_API_BASE_URL": "https://proxy.local/",
            "TIMEWEB_REQUEST_TIMEOUT": "5",
            "TIMEWEB_LOG_LEVEL": "debug",
        })
        assert settings.base_url == "https://proxy.local"
        assert settings.timeout == 5.0
        assert settings.log_level == "DEBUG"

    def test_sse_requires_api_key(self):
        with pytest.raises(ConfigError):
            load_settings({"TIMEWEB_CLOUD_TOKEN": "tok", "TIMEWEB_MCP_TRANSPORT": "sse"})

    def test_sse_with_api_key(self):
        settings = load_settings({
            "TIMEWEB_CLOUD_TOKEN": "tok",
            "TIMEWEB_MCP_TRANSPORT": "sse",
            "MCP_API_KEY": "k",
            "TIMEWEB_MCP_PORT": "9000",
        })
        assert settings.transport == "sse"
        assert settings.port == 9000
        assert settings.api_key == "k"

    def test_unknown_transport(self):
        with pytest.raises(ConfigError):
            load_settings({"TIMEWEB_CLOUD_TOKEN": "tok", "TIMEWEB_MCP_TRANSPORT": "websocket"})

    def test_non_numeric_timeout(self):
        with pytest.raises(ConfigError):
            load_settings({"TIMEWEB_CLOUD_TOKEN": "tok", "TIMEWEB_REQUEST_TIMEOUT": "soon"})

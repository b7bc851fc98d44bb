"""Environment configuration, read once at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass

from timeweb_mcp.constants import API_BASE_URL, API_TOKEN_URL, REQUEST_TIMEOUT
from timeweb_mcp.shared.errors import ConfigError

TRANSPORTS = ("stdio", "sse")


@dataclass(frozen=True)
class Settings:
    token: str
    base_url: str = API_BASE_URL
    timeout: float = REQUEST_TIMEOUT
    transport: str = "stdio"
    host: str = "0.0.0.0"
    port: int = 8080
    api_key: str = ""
    log_level: str = "INFO"


def load_settings(environ: dict | None = None) -> Settings:
    """Build Settings from the environment. Raises ConfigError when unusable."""
    env = os.environ if environ is None else environ

    token = env.get("TIMEWEB_CLOUD_TOKEN", "").strip()
    if not token:
        raise ConfigError(
            "TIMEWEB_CLOUD_TOKEN environment variable is required. "
            f"Create an API token at {API_TOKEN_URL} and set it with: "
            "export TIMEWEB_CLOUD_TOKEN=your_token"
        )

    transport = env.get("TIMEWEB_MCP_TRANSPORT", "stdio").strip().lower()
    if transport not in TRANSPORTS:
        raise ConfigError(
            f"TIMEWEB_MCP_TRANSPORT must be one of {', '.join(TRANSPORTS)}, got '{transport}'"
        )

    api_key = env.get("MCP_API_KEY", "")
    if transport == "sse" and not api_key:
        raise ConfigError("MCP_API_KEY environment variable is required for the sse transport")

    try:
        timeout = float(env.get("TIMEWEB_REQUEST_TIMEOUT", REQUEST_TIMEOUT))
        port = int(env.get("TIMEWEB_MCP_PORT", 8080))
    except ValueError as exc:
        raise ConfigError(f"Invalid numeric setting: {exc}") from exc

    return Settings(
        token=token,
        base_url=env.get("TIMEWEB_API_BASE_URL", API_BASE_URL).rstrip("/"),
        timeout=timeout,
        transport=transport,
        host=env.get("TIMEWEB_MCP_HOST", "0.0.0.0"),
        port=port,
        api_key=api_key,
        log_level=env.get("TIMEWEB_LOG_LEVEL", "INFO").upper(),
    )

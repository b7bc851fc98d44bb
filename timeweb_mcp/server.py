"""Timeweb Cloud MCP server: tool registration, SSE app and entry point."""

import json
import logging
import sys

from mcp.server.fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from timeweb_mcp.constants import SERVER_NAME, SERVER_VERSION
from timeweb_mcp.settings import load_settings
from timeweb_mcp.shared.api import TimewebClient
from timeweb_mcp.shared.dispatch import ToolRegistry, register_operations
from timeweb_mcp.shared.errors import ConfigError
from timeweb_mcp.tools import (
    account,
    apps,
    balancers,
    databases,
    disks,
    domains,
    firewall,
    floating_ips,
    images,
    kubernetes,
    locations,
    projects,
    servers,
    ssh_keys,
    storage,
    vpc,
)

logger = logging.getLogger(__name__)

TOOL_MODULES = (
    account,
    servers,
    disks,
    databases,
    kubernetes,
    storage,
    domains,
    ssh_keys,
    floating_ips,
    locations,
    projects,
    vpc,
    balancers,
    firewall,
    images,
    apps,
)


def build_registry() -> ToolRegistry:
    registry = ToolRegistry()
    for module in TOOL_MODULES:
        registry.extend(module.OPERATIONS)
    return registry


def create_mcp(client: TimewebClient, registry: ToolRegistry | None = None) -> FastMCP:
    """FastMCP instance with every tool bound to ``client``."""
    mcp = FastMCP(SERVER_NAME)
    register_operations(mcp, registry if registry is not None else build_registry(), client)
    return mcp


# Skips /health, checks the Bearer token on all other routes
class AuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, api_key: str):
        super().__init__(app)
        self.api_key = api_key

    async def dispatch(self, request: Request, call_next):
        if request.url.path == "/health":
            return await call_next(request)
        auth = request.headers.get("authorization", "")
        if auth != f"Bearer {self.api_key}":
            return JSONResponse({"error": "unauthorized"}, status_code=401)
        return await call_next(request)


async def health(request: Request):
    return JSONResponse({"status": "ok", "server": SERVER_NAME, "version": SERVER_VERSION})


def create_app(mcp: FastMCP, api_key: str) -> Starlette:
    """Wrap the FastMCP SSE app with auth and a health route."""
    return Starlette(
        routes=[
            Route("/health", health),
            Mount("/", app=mcp.sse_app()),
        ],
        middleware=[Middleware(AuthMiddleware, api_key=api_key)],
    )


def main():
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    # stdout carries the stdio protocol; logs go to stderr
    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    client = TimewebClient(settings.token, base_url=settings.base_url, timeout=settings.timeout)
    registry = build_registry()
    mcp = create_mcp(client, registry)
    logger.info(json.dumps({
        "event": "startup",
        "server": SERVER_NAME,
        "transport": settings.transport,
        "tools": len(registry),
    }))

    if settings.transport == "sse":
        import uvicorn
        uvicorn.run(create_app(mcp, settings.api_key), host=settings.host, port=settings.port)
    else:
        mcp.run()


if __name__ == "__main__":
    main()

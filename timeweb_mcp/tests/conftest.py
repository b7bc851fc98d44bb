"""Conftest for timeweb_mcp tests: puts the repository root on sys.path."""

import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))


class FakeClient:
    """Stands in for TimewebClient: records calls, returns a canned payload or raises."""

    def __init__(self, payload=None, error=None):
        self.payload = {} if payload is None else payload
        self.error = error
        self.calls = []

    async def request(self, method, path, params=None, json=None):
        self.calls.append({"method": method, "path": path, "params": params, "json": json})
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def http_error():
    """Build an httpx.HTTPStatusError for a status and optional JSON body."""

    def build(status: int, body=None) -> httpx.HTTPStatusError:
        request = httpx.Request("GET", "https://api.timeweb.cloud/api/v1/dbs/1")
        if body is None:
            response = httpx.Response(status, request=request)
        else:
            response = httpx.Response(status, json=body, request=request)
        return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)

    return build

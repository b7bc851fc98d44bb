"""Tests for timeweb_mcp/shared/api.py using httpx.MockTransport."""

import json

import httpx
import pytest

from timeweb_mcp.shared.api import TimewebClient


def recording_transport(status=200, body=None, content=None):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if content is not None:
            return httpx.Response(status, content=content)
        return httpx.Response(status, json=body if body is not None else {})

    return httpx.MockTransport(handler), seen


class TestTimewebClient:
    @pytest.mark.asyncio
    async def test_sends_bearer_and_json_headers(self):
        transport, seen = recording_transport(body={"servers": []})
        client = TimewebClient("secret", base_url="https://api.example.test", transport=transport)

        result = await client.request("GET", "/api/v1/servers", params={"limit": 5, "offset": 0})

        assert result == {"servers": []}
        request = seen[0]
        assert request.headers["Authorization"] == "Bearer secret"
        assert request.headers["Accept"] == "application/json"
        assert request.url.path == "/api/v1/servers"
        assert request.url.params["limit"] == "5"

    @pytest.mark.asyncio
    async def test_sends_json_body(self):
        transport, seen = recording_transport(status=201, body={"ssh_key": {"id": 1}})
        client = TimewebClient("t", base_url="https://api.example.test", transport=transport)

        await client.request("POST", "/api/v1/ssh-keys", json={"name": "k1"})

        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {"name": "k1"}

    @pytest.mark.asyncio
    async def test_empty_body_returns_empty_dict(self):
        transport, _ = recording_transport(status=204, content=b"")
        client = TimewebClient("t", base_url="https://api.example.test", transport=transport)

        assert await client.request("DELETE", "/api/v1/servers/1") == {}

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        transport, _ = recording_transport(status=404, body={"message": "not here"})
        client = TimewebClient("t", base_url="https://api.example.test", transport=transport)

        with pytest.raises(httpx.HTTPStatusError) as exc:
            await client.request("GET", "/api/v1/dbs/9")
        assert exc.value.response.status_code == 404


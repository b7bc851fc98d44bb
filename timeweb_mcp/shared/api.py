"""Authenticated transport to the Timeweb Cloud REST API."""

from __future__ import annotations

import logging

import httpx

from timeweb_mcp.constants import API_BASE_URL, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class TimewebClient:
    """Immutable connection settings plus a single-request coroutine.

    Each request opens its own short-lived ``httpx.AsyncClient``; nothing is
    shared between tool invocations. ``transport`` lets tests substitute an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        token: str,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._token = token
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    @property
    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: dict | None = None,
    ) -> dict:
        """Perform one call. Returns the decoded body, ``{}`` for an empty one.

        Non-2xx responses raise ``httpx.HTTPStatusError``; transport failures
        raise the matching ``httpx`` exception.
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self._transport,
        ) as http:
            response = await http.request(method, path, params=params, json=json)

        logger.debug("%s %s -> %s", method, path, response.status_code)
        response.raise_for_status()
        if not response.content or not response.content.strip():
            return {}
        return response.json()

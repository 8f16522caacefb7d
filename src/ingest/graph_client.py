"""Microsoft Graph REST client.

This module wraps ``httpx.AsyncClient`` with the two request shapes the
ingestors need: JSON list pages and streamed binary asset content.
Every transport or payload failure surfaces as ``SourceTransportError``.
"""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from core.config import SourceConfig
from core.errors import SourceTransportError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_USER_AGENT = "sharepoint-source/0.1"
# InvalidURL and StreamError sit outside the httpx.HTTPError hierarchy.
_HTTPX_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


class GraphClient:
    """Async Graph API client bound to one base URL and token."""

    def __init__(
        self,
        config: SourceConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create the client.

        Args:
            config: Runtime configuration with base URL, token, and timeouts.
            transport: Optional transport override, used by tests.
        """
        headers = {"Accept": "application/json", "User-Agent": _USER_AGENT}
        if config.access_token:
            headers["Authorization"] = f"Bearer {config.access_token}"
        self._http = httpx.AsyncClient(
            base_url=config.graph_base_url,
            headers=headers,
            timeout=httpx.Timeout(config.request_timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "GraphClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close pooled connections."""
        await self._http.aclose()

    async def get_json(
        self,
        path: str,
        params: Mapping[str, str] | None = None,
    ) -> Mapping[str, Any]:
        """Fetch a JSON object resource.

        Args:
            path: Resource path relative to the Graph base URL.
            params: Optional OData query parameters.

        Returns:
            Decoded JSON object.

        Raises:
            SourceTransportError: If the request fails or the body is not an object.
        """
        try:
            response = await self._http.get(path, params=dict(params or {}))
            response.raise_for_status()
        except _HTTPX_ERRORS as error:
            raise SourceTransportError(f"GET {path} failed: {_describe_error(error)}") from error
        try:
            payload = response.json()
        except ValueError as error:
            raise SourceTransportError(f"GET {path} returned a non-JSON body.") from error
        if not isinstance(payload, Mapping):
            raise SourceTransportError(
                f"GET {path} returned {type(payload).__name__}, expected a JSON object."
            )
        _LOGGER.debug("graph_json_fetched", path=path, status_code=response.status_code)
        return payload

    async def get_bytes(self, path: str) -> bytes:
        """Stream a binary resource into one buffer.

        Args:
            path: Resource path relative to the Graph base URL.

        Returns:
            Concatenated response body.

        Raises:
            SourceTransportError: If the request or stream fails.
        """
        chunks: list[bytes] = []
        try:
            async with self._http.stream("GET", path) as response:
                response.raise_for_status()
                async for chunk in response.aiter_bytes():
                    chunks.append(chunk)
        except _HTTPX_ERRORS as error:
            raise SourceTransportError(f"GET {path} failed: {_describe_error(error)}") from error
        buffer = b"".join(chunks)
        _LOGGER.debug("graph_bytes_fetched", path=path, size=len(buffer))
        return buffer


def _describe_error(error: Exception) -> str:
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP {error.response.status_code}"
    return str(error) or type(error).__name__

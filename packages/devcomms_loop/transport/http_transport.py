"""
Devcomms HTTP Transport

Polls the remote host over HTTP. Each batch is sent as the path of
a single GET request and the response body is returned verbatim.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from devcomms_core.exceptions import TransportError

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Transport adapter backed by httpx.AsyncClient.

    Usage:
        >>> async with HttpTransport("http://192.168.1.20:8080") as transport:
        ...     text = await transport.send("Bat\\rRF\\r")
    """

    DEFAULT_BASE_URL = "http://127.0.0.1:8080"
    DEFAULT_PATH_PREFIX = "/_/"
    DEFAULT_TIMEOUT = 3.0

    # Characters passed through unescaped in the request path
    SAFE_CHARS = ";/,"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        path_prefix: str = DEFAULT_PATH_PREFIX,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize HTTP transport

        Args:
            base_url: Remote host base URL
            path_prefix: Path the batch is appended to
            timeout: Request timeout in seconds
            http_client: Optional pre-configured HTTP client
        """
        self.base_url = base_url.rstrip('/')
        self.path_prefix = path_prefix
        self.timeout = timeout

        if http_client is not None:
            self._http_client = http_client
            self._owns_http_client = False
        else:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=timeout
            )
            self._owns_http_client = True

    def build_path(self, payload: str) -> str:
        """Build the request path for a batch"""
        return self.path_prefix + quote(payload, safe=self.SAFE_CHARS)

    async def send(self, payload: str) -> str:
        """Send a batch and return the response text

        Raises:
            TransportError: Request failed or host answered with an error status
        """
        try:
            response = await self._http_client.get(self.build_path(payload))
            response.raise_for_status()
            return response.text

        except httpx.HTTPStatusError as e:
            raise TransportError(f"Host error: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Connection error: {e}") from e

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close HTTP client if owned by this instance"""
        if self._owns_http_client:
            await self._http_client.aclose()
            logger.debug("HTTP transport closed")

    def __repr__(self) -> str:
        return f"HttpTransport(base_url={self.base_url!r}, path_prefix={self.path_prefix!r})"

"""
Base Client Classes

Base class for the HTTP collaborators (quoting service, signing service,
Stacks node) with common client management and error normalization.
"""

import asyncio
from abc import ABC
from typing import Any, Dict, Optional

import httpx

from stxswap.logging import log


class HTTPClientError(Exception):
    """Base exception for collaborator HTTP failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BaseHTTPClient(ABC):
    """
    Base class for HTTP-based API clients.

    Provides common functionality:
    - HTTP client management bound to the running event loop
    - Error normalization into ``error_class``
    - Request timeout management

    Requests are issued once; a failed call is reported to the caller and
    never retried here.
    """

    error_class: type[HTTPClientError] = HTTPClientError

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize base HTTP client.

        Args:
            config: Configuration dict with:
                - base_url: Base URL for API
                - timeout: Request timeout in seconds (default: 30.0)
                - headers: Default request headers
                - transport: Optional httpx transport (used by tests)
        """
        config = config or {}
        self.base_url = (config.get("base_url") or "").rstrip("/")
        self.timeout = config.get("timeout", 30.0)
        self.headers: Dict[str, str] = dict(config.get("headers") or {})
        self.transport: Optional[httpx.AsyncBaseTransport] = config.get("transport")
        self._client: Optional[httpx.AsyncClient] = None
        self._client_loop_id: Optional[int] = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """
        Ensure HTTP client is initialized and bound to current event loop.

        Returns:
            httpx.AsyncClient instance
        """
        current_loop_id = id(asyncio.get_running_loop())

        if self._client is None or self._client_loop_id != current_loop_id:
            if self._client is not None:
                await self._client.aclose()

            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self.transport,
            )
            self._client_loop_id = current_loop_id

        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        raise_for_status: bool = True,
        **kwargs,
    ) -> httpx.Response:
        """
        Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Path relative to ``base_url``
            raise_for_status: Convert 4xx/5xx responses into ``error_class``
            **kwargs: Additional arguments for httpx request

        Returns:
            httpx.Response

        Raises:
            HTTPClientError: (as ``error_class``) on transport or status failure
        """
        client = await self._ensure_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            log.error(f"{method} {self.base_url}{path} failed: {e}")
            raise self.error_class(f"Request failed: {e}") from e

        if raise_for_status and response.is_error:
            log.error(f"{method} {self.base_url}{path} returned HTTP {response.status_code}")
            raise self.error_class(
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        return response

    async def _request_json(self, method: str, path: str, **kwargs) -> Any:
        response = await self._request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise self.error_class(f"Invalid JSON from {path}: {response.text[:200]}") from e

    async def close(self):
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            self._client_loop_id = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

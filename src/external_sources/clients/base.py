"""Abstract base class for external record clients.

Shopify and Notion clients share one request path: a long-lived
httpx.AsyncClient with an explicit timeout, no automatic retries, and
every failure surfaced as UpstreamError tagged with the source system.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from src.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class ExternalClient(ABC):
    """Base class for read/write adapters to an external system.

    Concrete implementations must provide:
    - source_name: identifier used in logs and UpstreamError.source
    - _build_client(): configured httpx.AsyncClient

    Example implementation:
        class ShopifyClient(ExternalClient):
            @property
            def source_name(self) -> str:
                return "shopify"
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the external system identifier, e.g. 'shopify'."""
        ...

    @abstractmethod
    def _base_url(self) -> str:
        """Return the base URL all request paths are relative to."""
        ...

    @abstractmethod
    def _headers(self) -> dict[str, str]:
        """Return headers sent with every request."""
        ...

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url(),
                headers=self._headers(),
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make a request and return the parsed JSON body.

        Args:
            method: HTTP method (GET, POST)
            path: Path relative to the base URL
            params: Query parameters
            json: JSON body data

        Returns:
            Parsed JSON response

        Raises:
            UpstreamError: On transport failure, timeout, non-2xx status or
                a body that is not JSON.
        """
        client = self._get_client()
        try:
            response = await client.request(method, path, params=params, json=json)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "%s %s %s failed: %s",
                self.source_name,
                method,
                path,
                e.response.status_code,
            )
            raise UpstreamError(
                self.source_name,
                f"{e.response.status_code} {e.response.reason_phrase}",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            logger.error("%s %s %s request failed: %s", self.source_name, method, path, e)
            raise UpstreamError(self.source_name, f"Request failed: {e}") from e
        except ValueError as e:
            logger.error("%s %s %s returned non-JSON body", self.source_name, method, path)
            raise UpstreamError(self.source_name, "Response body is not JSON") from e

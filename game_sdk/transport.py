"""HTTP transport used by the invoker and the GAME client."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

import httpx

from game_sdk.config import DEFAULT_TIMEOUT
from game_sdk.exceptions import TransportError

logger = logging.getLogger(__name__)

USER_AGENT = "game-sdk-python/0.1.0"


@dataclass
class TransportResponse:
    """Status and decoded body of a completed request."""
    status_code: int
    data: Any = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """
    Anything that can perform one HTTP request.

    Implementations return a TransportResponse for every response they
    receive, whatever its status, and raise TransportError when no
    response could be obtained.
    """

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
    ) -> TransportResponse:
        ...


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON when possible, else as text."""
    if not response.content:
        return None
    if response.headers.get("content-type", "").startswith("application/json"):
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


class HttpxTransport:
    """
    Transport backed by ``httpx.AsyncClient``.

    Usage:
        async with HttpxTransport(timeout=10.0) as transport:
            response = await transport.request("GET", "https://example.com")
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.timeout = timeout
        self._http_client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "HttpxTransport":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT},
            )
        return self._http_client

    async def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
    ) -> TransportResponse:
        client = self._ensure_client()

        logger.debug(f"Making {method} request to {url}")
        try:
            response = await client.request(method, url, headers=headers, json=json)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}") from e
        except httpx.InvalidURL as e:
            raise TransportError(f"Invalid URL: {e}") from e

        logger.debug(f"Response status: {response.status_code}")
        return TransportResponse(
            status_code=response.status_code,
            data=decode_body(response),
            headers=dict(response.headers),
        )

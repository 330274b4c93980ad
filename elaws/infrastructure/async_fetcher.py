"""
Async HTTP transport for the e-Gov Law API.

Single GET per call: no rate limiting, retries or caching.
"""
import httpx
from dataclasses import dataclass
from typing import Optional
import logging

from elaws.infrastructure.adapters.elaws_errors import ElawsTransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResponse:
    """Raw outcome of one request."""
    url: str
    status_code: int
    content: bytes
    encoding: str = "utf-8"

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        # utf-8-sig drops the BOM some responses carry
        encoding = "utf-8-sig" if self.encoding.lower().replace("_", "-") == "utf-8" else self.encoding
        return self.content.decode(encoding, errors="replace")


class AsyncFetcher:
    """Async HTTP client for fetching API responses."""

    DEFAULT_HEADERS = {
        "Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "ja,en;q=0.8",
    }

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = "elaws-client/0.1",
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent with each request
            client: Pre-built httpx client; the fetcher does not close it
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={**self.DEFAULT_HEADERS, "User-Agent": user_agent},
        )

    async def fetch(self, url: str) -> FetchResponse:
        """
        Fetch url once.

        Args:
            url: The URL to fetch

        Returns:
            FetchResponse, including non-2xx responses

        Raises:
            ElawsTransportError: If no response was received
        """
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.debug(f"Fetch error for {url}: {e}")
            raise ElawsTransportError(f"Request failed: {e}", url=url) from e

        logger.debug(f"HTTP {response.status_code} for {url} ({len(response.content)} bytes)")
        return FetchResponse(
            url=str(response.url),
            status_code=response.status_code,
            content=response.content,
            encoding=response.encoding or "utf-8",
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

"""Storefront REST API client."""

import asyncio
import logging
import random
from typing import Any, Optional

import httpx

from .config import ApiConfig
from .errors import NotFoundError, TransientFetchError

logger = logging.getLogger(__name__)

# Statuses worth another attempt
RETRY_STATUSES = {429, 502, 503, 504}


class ApiClient:
    """Client for the storefront REST API.

    Configuration is handed in at construction and lives as long as the
    client; nothing is read from module-level state.
    """

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or ApiConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self):
        """Initialize the HTTP client."""
        if not self.config.base_url:
            raise ValueError(
                "Storefront API URL not configured. "
                "Set STOREFRONT_API_URL in .env file."
            )

        self._client = httpx.AsyncClient(
            timeout=self.config.timeout,
            headers=self.config.auth_headers,
            transport=self._transport,
        )

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Client not started. Use 'async with' or call start() first.")
        return self._client

    async def _sleep_for_retry(self, resp: Optional[httpx.Response], attempt: int) -> None:
        """
        Respect Retry-After header when present; otherwise exponential backoff with jitter.
        """
        max_backoff = self.config.max_backoff
        retry_after = resp.headers.get("retry-after") if resp is not None else None
        if retry_after:
            try:
                await asyncio.sleep(max(0.0, min(float(retry_after), max_backoff)))
                return
            except ValueError:
                pass

        base = min(max_backoff, 0.5 * (2 ** attempt))
        await asyncio.sleep(base + random.uniform(0.0, base / 2))

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path below the API base URL, starting with '/'
            params: Query parameters
            json: JSON body

        Returns:
            The decoded response body

        Raises:
            NotFoundError: the server answered 404
            TransientFetchError: the request failed after all retries
        """
        url = f"{self.config.api_base_url}{path}"
        max_retries = self.config.max_retries

        for attempt in range(max_retries + 1):
            try:
                resp = await self.client.request(method, url, params=params, json=json)
            except httpx.TransportError as e:
                if attempt < max_retries:
                    logger.debug("%s %s failed (%s), retrying", method, path, e)
                    await self._sleep_for_retry(None, attempt)
                    continue
                raise TransientFetchError(f"{method} {path} failed: {e}") from e

            if resp.status_code in RETRY_STATUSES and attempt < max_retries:
                logger.debug("%s %s returned %d, retrying", method, path, resp.status_code)
                await self._sleep_for_retry(resp, attempt)
                continue

            if resp.status_code == 404:
                raise NotFoundError(f"{method} {path} not found")
            if resp.is_error:
                raise TransientFetchError(
                    f"{method} {path} returned {resp.status_code}",
                    status_code=resp.status_code,
                )
            return resp.json()

        # Unreachable: the last attempt either returns or raises.
        raise TransientFetchError(f"{method} {path} failed")

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("POST", path, json=json)

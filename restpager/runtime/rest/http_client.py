"""HTTP client helper."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ...core.exceptions import RateLimitError, TransportError
from ...core.response import Response

logger = logging.getLogger(__name__)


class HTTPClient:
    """Async HTTP client wrapper returning raw page responses."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.default_headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """GET request."""
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        data: str | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """POST request with a raw body."""
        return await self.request("POST", url, params=params, headers=headers, data=data)

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        data: str | None = None,
    ) -> Response:
        full_url = self._url(url)
        merged_headers = {**self.default_headers, **(headers or {})}
        try:
            async with self.session.request(
                method, full_url, params=params, headers=merged_headers, data=data
            ) as response:
                content = await response.text()
                requested_url = str(response.url)
                if response.status == 429:
                    retry_after = _retry_after(response.headers.get("Retry-After"))
                    raise RateLimitError(
                        f"{method} {requested_url} rate limited",
                        retry_after=retry_after,
                        url=requested_url,
                    )
                if not 200 <= response.status < 300:
                    raise TransportError(
                        f"{method} {requested_url} failed with status {response.status}: {content}",
                        status_code=response.status,
                        url=requested_url,
                    )
                return Response(
                    headers={key: value for key, value in response.headers.items()},
                    content=content,
                    status_code=response.status,
                    requested_url=requested_url,
                )
        except aiohttp.ClientError as e:
            logger.error("http_request_failed", extra={"method": method, "url": full_url})
            raise TransportError(f"{method} {full_url} failed: {e}", url=full_url) from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


def _retry_after(value: str | None) -> int:
    if value is None:
        return 60
    try:
        return int(value)
    except ValueError:
        return 60

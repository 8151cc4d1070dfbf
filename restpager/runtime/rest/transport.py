"""Page transport: the single collaborator the paging runtime calls."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ...config import (
    API_PATH,
    DEFAULT_TIMEOUT,
    DEFAULT_VERSION,
    HDR_ACCEPT,
    HDR_AUTHORIZATION,
    HDR_CONTENT_TYPE,
    QAPI_PATH,
)
from ...core.exceptions import InvalidArgumentError
from ...core.filters import PageFilter
from ...core.response import Response
from .http_client import HTTPClient


@runtime_checkable
class PageTransport(Protocol):
    """Fetches one page of a resource."""

    async def fetch_page(
        self,
        resource: str,
        version: str,
        query: dict[str, str],
        *,
        body: str | None = None,
    ) -> Response: ...


def build_page_query(
    offset: int | None,
    limit: int | None,
    page_filter: PageFilter | None = None,
) -> dict[str, str]:
    """Build the query map for one page request.

    ``offset`` is only sent when >= 0 and ``limit`` only when > 0. Filter
    parameters are merged in after the paging parameters.
    """
    query: dict[str, str] = {}
    if offset is not None and offset >= 0:
        query["offset"] = str(offset)
    if limit is not None and limit > 0:
        query["limit"] = str(limit)
    if page_filter is not None:
        query.update(page_filter.query_params())
    return query


def build_headers(version: str | None) -> dict[str, str]:
    if version is None or not version.strip():
        version = DEFAULT_VERSION
    return {HDR_ACCEPT: version, HDR_CONTENT_TYPE: version}


class RESTTransport:
    """PageTransport over HTTPClient.

    GETs ``/api/<resource>``; requests carrying a body are POSTed to
    ``/qapi/<resource>`` instead.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        api_token: str | None = None,
        http: HTTPClient | None = None,
    ) -> None:
        default_headers = {HDR_AUTHORIZATION: f"Bearer {api_token}"} if api_token else None
        self._http = http or HTTPClient(base_url=base_url, timeout=timeout, headers=default_headers)

    async def fetch_page(
        self,
        resource: str,
        version: str,
        query: dict[str, str],
        *,
        body: str | None = None,
    ) -> Response:
        if not resource or not resource.strip():
            raise InvalidArgumentError("Cannot fetch a page without a resource name")
        headers = build_headers(version)
        if body is not None:
            return await self._http.post(
                f"{QAPI_PATH}/{resource}", data=body, params=query or None, headers=headers
            )
        return await self._http.get(f"{API_PATH}/{resource}", params=query or None, headers=headers)

    async def close(self) -> None:
        await self._http.close()

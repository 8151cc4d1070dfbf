"""PagingClient facade over the paging pipeline.

The PagingClient is the public entry point for paging a resource. It turns
keyword arguments into a PagingRequest, runs it through the pipeline and
returns the requested output shape.

Architecture:
    This module implements the Facade pattern over PagingResolver,
    FetchLoop, ResultAssembler and PagingCoordinator. The transport is
    injected, so tests can hand in a fake without touching HTTP.

Design Decisions:
    - One keyword-argument method per paging intent instead of one method
      per combination of optional parameters
    - Paging methods (get_all_pages, get_pages, get_rows, ...) return an
      empty list for an empty resource name, while get, get_by_id,
      get_with_filter and fetch raise InvalidArgumentError
    - Context manager pattern closes the owned transport

See Also:
    - PagingPipeline: resolve, fetch, assemble
    - PagingCoordinator: background runs
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from pydantic import BaseModel

from ..config import PagerSettings
from ..core.enums import OutputShape
from ..core.exceptions import InvalidArgumentError
from ..core.filters import PageFilter
from ..core.request import PagingRequest
from ..core.response import Response
from ..runtime.paging import (
    PagingCoordinator,
    PagingHandle,
    PagingPipeline,
    read_max_page_size,
    read_total_count,
    resolve_page_size,
    resolve_version,
)
from ..runtime.rest import PageTransport, RESTTransport

logger = logging.getLogger(__name__)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class PagingClient:
    """High-level client for paging REST resources.

    Example:
        >>> async with PagingClient.from_settings() as client:
        ...     rows = await client.get_rows(
        ...         "student-cohorts",
        ...         num_rows=120,
        ...         page_size=50,
        ...         shape=OutputShape.ROW_RECORDS,
        ...     )
    """

    def __init__(
        self,
        transport: PageTransport,
        *,
        default_version: str | None = None,
        pipeline: PagingPipeline | None = None,
        owns_transport: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            transport: Page transport used for every request
            default_version: Version used when a call gives none
            pipeline: Optional pipeline (built over the transport if not provided)
            owns_transport: Close the transport when the client closes
        """
        self._transport = transport
        self._default_version = default_version
        self._pipeline = pipeline or PagingPipeline(transport)
        self._coordinator = PagingCoordinator(self._pipeline)
        self._owns_transport = owns_transport
        self._closed = False

    @classmethod
    def from_settings(cls, settings: PagerSettings | None = None) -> PagingClient:
        """Build a client over a RESTTransport configured from the environment."""
        settings = settings or PagerSettings()
        transport = RESTTransport(
            settings.base_url,
            timeout=settings.timeout,
            api_token=settings.api_token,
        )
        return cls(
            transport,
            default_version=settings.default_version,
            owns_transport=True,
        )

    @property
    def coordinator(self) -> PagingCoordinator:
        return self._coordinator

    def _version(self, version: str | None) -> str:
        if version is not None and version.strip():
            return version
        return resolve_version(self._default_version)

    def _with_default_version(self, request: PagingRequest) -> PagingRequest:
        if _blank(request.version) and self._default_version is not None:
            return replace(request, version=self._default_version)
        return request

    # --- Single requests ---------------------------------------------------

    async def get(
        self,
        resource: str,
        *,
        version: str | None = None,
        offset: int | None = None,
        page_size: int | None = None,
        filter: PageFilter | None = None,
    ) -> Response:
        """Fetch one page.

        Raises:
            InvalidArgumentError: If resource is empty
        """
        if _blank(resource):
            raise InvalidArgumentError("Cannot submit a GET request without a resource name")
        return await self._pipeline.resolver.discover(
            resource, self._version(version), filter, offset=offset, limit=page_size
        )

    async def get_with_filter(
        self,
        resource: str,
        filter: PageFilter | None,
        *,
        version: str | None = None,
        offset: int | None = None,
        page_size: int | None = None,
    ) -> Response:
        """Fetch one filtered page.

        Raises:
            InvalidArgumentError: If resource is empty or filter is None
        """
        if filter is None:
            raise InvalidArgumentError(
                f"Cannot submit a filtered GET request for {resource!r} without a filter"
            )
        return await self.get(
            resource, version=version, offset=offset, page_size=page_size, filter=filter
        )

    async def get_by_id(
        self, resource: str, resource_id: str, *, version: str | None = None
    ) -> Response:
        """Fetch a single item of a resource by its id."""
        if _blank(resource):
            raise InvalidArgumentError("Cannot get by id without a resource name")
        if _blank(resource_id):
            raise InvalidArgumentError(f"Cannot get {resource!r} by id without an id")
        return await self._transport.fetch_page(
            f"{resource}/{resource_id}", self._version(version), {}
        )

    # --- Paging -------------------------------------------------------------

    async def fetch(
        self,
        request: PagingRequest,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Run a prepared PagingRequest.

        Raises:
            InvalidArgumentError: If the request's resource is empty
        """
        return await self._pipeline.run(self._with_default_version(request), shape, model)

    def submit(
        self,
        request: PagingRequest,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
    ) -> PagingHandle:
        """Run a PagingRequest in the background and return its handle."""
        return self._coordinator.submit(self._with_default_version(request), shape, model)

    async def _page(
        self,
        resource: str,
        *,
        version: str | None,
        page_size: int | None,
        offset: int | None = None,
        num_pages: int | None = None,
        num_rows: int | None = None,
        filter: PageFilter | None,
        shape: OutputShape,
        model: type[BaseModel] | None,
    ) -> list[Any]:
        if _blank(resource):
            logger.debug("paging_skipped_empty_resource")
            return []
        request = PagingRequest(
            resource=resource,
            version=self._version(version),
            filter=filter,
            page_size=page_size,
            offset=offset,
            page_count=num_pages,
            row_count=num_rows,
        )
        return await self._pipeline.run(request, shape, model)

    async def get_all_pages(
        self,
        resource: str,
        *,
        version: str | None = None,
        page_size: int | None = None,
        filter: PageFilter | None = None,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Every page of a resource."""
        return await self._page(
            resource,
            version=version,
            page_size=page_size,
            filter=filter,
            shape=shape,
            model=model,
        )

    async def get_all_pages_from_offset(
        self,
        resource: str,
        offset: int,
        *,
        version: str | None = None,
        page_size: int | None = None,
        filter: PageFilter | None = None,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Every page from ``offset`` to the end."""
        return await self._page(
            resource,
            version=version,
            page_size=page_size,
            offset=offset,
            filter=filter,
            shape=shape,
            model=model,
        )

    async def get_pages(
        self,
        resource: str,
        num_pages: int,
        *,
        version: str | None = None,
        page_size: int | None = None,
        filter: PageFilter | None = None,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Up to ``num_pages`` pages from the start."""
        return await self._page(
            resource,
            version=version,
            page_size=page_size,
            num_pages=num_pages,
            filter=filter,
            shape=shape,
            model=model,
        )

    async def get_pages_from_offset(
        self,
        resource: str,
        offset: int,
        num_pages: int,
        *,
        version: str | None = None,
        page_size: int | None = None,
        filter: PageFilter | None = None,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Up to ``num_pages`` pages starting at ``offset``."""
        return await self._page(
            resource,
            version=version,
            page_size=page_size,
            offset=offset,
            num_pages=num_pages,
            filter=filter,
            shape=shape,
            model=model,
        )

    async def get_rows(
        self,
        resource: str,
        num_rows: int,
        *,
        version: str | None = None,
        page_size: int | None = None,
        filter: PageFilter | None = None,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Exactly ``num_rows`` rows from the start (fewer if the resource is smaller)."""
        return await self._page(
            resource,
            version=version,
            page_size=page_size,
            num_rows=num_rows,
            filter=filter,
            shape=shape,
            model=model,
        )

    async def get_rows_from_offset(
        self,
        resource: str,
        offset: int,
        num_rows: int,
        *,
        version: str | None = None,
        page_size: int | None = None,
        filter: PageFilter | None = None,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Exactly ``num_rows`` rows starting at ``offset``."""
        return await self._page(
            resource,
            version=version,
            page_size=page_size,
            offset=offset,
            num_rows=num_rows,
            filter=filter,
            shape=shape,
            model=model,
        )

    # --- Discovery helpers ---------------------------------------------------

    async def get_total_count(
        self,
        resource: str,
        *,
        version: str | None = None,
        filter: PageFilter | None = None,
    ) -> int:
        """Server-reported total row count, 0 for an empty resource name."""
        if _blank(resource):
            return 0
        response = await self._pipeline.resolver.discover(resource, self._version(version), filter)
        return read_total_count(response)

    async def get_max_page_size(
        self,
        resource: str,
        *,
        version: str | None = None,
        filter: PageFilter | None = None,
    ) -> int:
        """Advertised maximum page size, 0 for an empty resource name."""
        if _blank(resource):
            return 0
        response = await self._pipeline.resolver.discover(resource, self._version(version), filter)
        return read_max_page_size(response)

    async def get_page_size(
        self,
        resource: str,
        *,
        version: str | None = None,
        filter: PageFilter | None = None,
    ) -> int:
        """Page size a run without an explicit size would use, 0 for an empty resource name."""
        if _blank(resource):
            return 0
        response = await self._pipeline.resolver.discover(resource, self._version(version), filter)
        return resolve_page_size(None, response)

    # --- Lifecycle -------------------------------------------------------------

    async def close(self) -> None:
        """Wait for background runs, then close the transport if owned."""
        if self._closed:
            return
        self._closed = True
        await self._coordinator.drain()
        if self._owns_transport:
            close = getattr(self._transport, "close", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> PagingClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

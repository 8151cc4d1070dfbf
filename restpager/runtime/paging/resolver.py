"""Paging resolution: one discovery fetch turned into a PagingPlan.

Architecture:
    The resolver issues at most one request (none when the caller already
    holds a page), reads the total count and maximum page size headers from
    it, settles the effective page size and offset, picks the strategy and
    decides whether the discovery page alone answers the request.

Design Decisions:
    - Without an explicit page size, the discovery page's own row count wins
      over a larger advertised maximum
    - An explicit page size is still capped by an advertised maximum
    - Missing or unparsable headers fall back instead of failing
"""

from __future__ import annotations

from ...config import (
    DEFAULT_MAX_PAGE_SIZE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_VERSION,
    HDR_X_MAX_PAGE_SIZE,
    HDR_X_TOTAL_COUNT,
)
from ...core.exceptions import InvalidArgumentError
from ...core.filters import PageFilter
from ...core.request import PagingRequest
from ...core.response import Response
from ..rest.transport import PageTransport, build_page_query
from .converters import array_length
from .definitions import PageWindow, PagingPlan, rows_needed
from .selector import select_strategy
from .telemetry import log_paging_plan


def resolve_version(version: str | None) -> str:
    if version is None or not version.strip():
        return DEFAULT_VERSION
    return version


def read_total_count(response: Response) -> int:
    """x-total-count, or 0 when missing or unparsable."""
    total = response.int_header(HDR_X_TOTAL_COUNT)
    return total if total is not None and total > 0 else 0


def read_max_page_size(response: Response) -> int:
    """x-max-page-size, or the default maximum when missing or unparsable."""
    max_page_size = response.int_header(HDR_X_MAX_PAGE_SIZE)
    if max_page_size is None or max_page_size <= 0:
        return DEFAULT_MAX_PAGE_SIZE
    return max_page_size


def resolve_page_size(requested: int | None, response: Response) -> int:
    """Effective page size for a run.

    Args:
        requested: Caller's page size (None or <= DEFAULT_PAGE_SIZE = not given)
        response: Discovery page

    Returns:
        A positive page size
    """
    if requested is not None and requested > DEFAULT_PAGE_SIZE:
        advertised = response.int_header(HDR_X_MAX_PAGE_SIZE)
        if advertised is not None and 0 < advertised < requested:
            return advertised
        return requested

    page_size = read_max_page_size(response)
    body_rows = array_length(response)
    if body_rows is not None and 0 < body_rows < page_size:
        page_size = body_rows
    return page_size


def window_of(response: Response) -> PageWindow:
    """Window a caller-supplied page covers, read from its requested URL."""
    offset = _as_int(response.query_param("offset"))
    limit = _as_int(response.query_param("limit"))
    return PageWindow(
        offset=offset if offset is not None and offset > 0 else 0,
        limit=limit if limit is not None and limit > 0 else None,
    )


def _as_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class PagingResolver:
    """Turns a PagingRequest into a PagingPlan."""

    def __init__(self, transport: PageTransport) -> None:
        self._t = transport

    async def discover(
        self,
        resource: str,
        version: str | None = None,
        page_filter: PageFilter | None = None,
        *,
        offset: int | None = None,
        limit: int | None = None,
    ) -> Response:
        """Issue a single page request, used for discovery.

        ``offset`` and ``limit`` are only sent when given (>= 0 and > 0).
        """
        if not resource or not resource.strip():
            raise InvalidArgumentError("Cannot page a resource without a resource name")
        query = build_page_query(offset, limit, page_filter)
        body = page_filter.body if page_filter is not None else None
        return await self._t.fetch_page(resource, resolve_version(version), query, body=body)

    async def resolve(self, request: PagingRequest) -> PagingPlan:
        """Resolve a request, fetching the discovery page unless one was supplied.

        Raises:
            InvalidArgumentError: If the resource name is empty
            TransportError: If the discovery request fails
        """
        if not request.resource or not request.resource.strip():
            raise InvalidArgumentError(
                "Cannot page a resource without a resource name"
            )
        version = resolve_version(request.version)
        offset = request.offset if request.offset is not None and request.offset > 0 else 0
        requested_size = request.page_size
        if requested_size is not None and requested_size <= DEFAULT_PAGE_SIZE:
            requested_size = None

        if request.initial_response is not None:
            discovery = request.initial_response
            discovery_window = window_of(discovery)
        else:
            discovery_window = PageWindow(offset=offset, limit=requested_size)
            discovery = await self.discover(
                request.resource,
                version,
                request.filter,
                offset=discovery_window.offset,
                limit=discovery_window.limit,
            )

        total_count = read_total_count(discovery)
        page_size = resolve_page_size(requested_size, discovery)
        strategy = select_strategy(request.offset, request.page_count, request.row_count)
        page_count = request.page_count if strategy.is_page_limited else None
        row_count = request.row_count if strategy.is_row_limited else None

        needed = rows_needed(
            strategy,
            total_count=total_count,
            offset=offset,
            page_size=page_size,
            page_count=page_count,
            row_count=row_count,
        )
        covered = needed == 0 or (
            discovery_window.offset <= offset
            and (offset - discovery_window.offset) + needed <= (array_length(discovery) or 0)
        )

        plan = PagingPlan(
            resource=request.resource,
            version=version,
            filter=request.filter,
            page_size=page_size,
            offset=offset,
            total_count=total_count,
            strategy=strategy,
            page_count=page_count,
            row_count=row_count,
            needs_fetch_loop=not covered,
            discovery_response=discovery,
            discovery_window=discovery_window,
        )
        log_paging_plan(plan)
        return plan

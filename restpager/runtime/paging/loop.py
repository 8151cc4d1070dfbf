"""Fetch loop: issues the page requests of a resolved plan, in order.

Each strategy has its own entry point, and all of them share one range
primitive that walks offsets ``start, start + page_size, ...`` until the
total count is reached, clamping the last limit to the rows that remain.
Pages are fetched strictly one after another; the total count read during
resolution is trusted for the whole run.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from time import perf_counter

from ...core.enums import PagingStrategy
from ...core.filters import PageFilter
from ...core.response import Response
from ..rest.transport import PageTransport, build_page_query
from .converters import array_length, slice_content
from .definitions import PageWindow, PagingPlan
from .telemetry import log_page_fetched, log_paging_error


async def fetch_window(
    transport: PageTransport,
    resource: str,
    version: str,
    page_filter: PageFilter | None,
    window: PageWindow,
) -> Response:
    """Fetch a single page window through the transport."""
    query = build_page_query(window.offset, window.limit, page_filter)
    body = page_filter.body if page_filter is not None else None
    return await transport.fetch_page(resource, version, query, body=body)


def reusable_page(plan: PagingPlan, window: PageWindow) -> Response | None:
    """The discovery page cut to ``window``, or None if it does not cover it.

    A discovery page fetched without a limit, or with a limit the server
    lowered, still covers a window at its offset when it holds enough rows.
    """
    discovery = plan.discovery_response
    if window.same_range(plan.discovery_window):
        return discovery
    if window.offset != plan.discovery_window.offset or window.limit is None:
        return None
    rows = array_length(discovery)
    if rows is None or rows < window.limit:
        return None
    return slice_content(discovery, 0, window.limit)


class FetchLoop:
    """Executes the page requests a PagingPlan calls for."""

    def __init__(self, transport: PageTransport) -> None:
        self._t = transport
        self._strategies: dict[PagingStrategy, Callable[[PagingPlan], Awaitable[list[Response]]]] = {
            PagingStrategy.ALL: self.page_all,
            PagingStrategy.COUNT_PAGES: self.page_count,
            PagingStrategy.FROM_OFFSET: self.page_from_offset,
            PagingStrategy.FROM_OFFSET_COUNT_PAGES: self.page_from_offset_count,
            PagingStrategy.ROW_LIMIT: self.page_row_limit,
            PagingStrategy.FROM_OFFSET_ROW_LIMIT: self.page_from_offset_row_limit,
        }

    async def fetch(self, plan: PagingPlan) -> list[Response]:
        """Fetch every page of the plan, in offset order."""
        return await self._strategies[plan.strategy](plan)

    async def page_all(self, plan: PagingPlan) -> list[Response]:
        return await self._fetch_range(plan, start=0)

    async def page_count(self, plan: PagingPlan) -> list[Response]:
        return await self._fetch_range(plan, start=0, max_pages=plan.page_count)

    async def page_from_offset(self, plan: PagingPlan) -> list[Response]:
        return await self._fetch_range(plan, start=plan.offset)

    async def page_from_offset_count(self, plan: PagingPlan) -> list[Response]:
        return await self._fetch_range(plan, start=plan.offset, max_pages=plan.page_count)

    async def page_row_limit(self, plan: PagingPlan) -> list[Response]:
        # The last page is not trimmed to the row limit here; the assembler does it.
        return await self._fetch_range(plan, start=0, row_goal=plan.row_count)

    async def page_from_offset_row_limit(self, plan: PagingPlan) -> list[Response]:
        return await self._fetch_range(plan, start=plan.offset, row_goal=plan.row_count)

    def windows(
        self,
        plan: PagingPlan,
        *,
        start: int,
        max_pages: int | None = None,
        row_goal: int | None = None,
    ) -> list[PageWindow]:
        """Page windows for a range, without fetching anything.

        Args:
            plan: Resolved plan (page size and total count)
            start: Offset of the first page
            max_pages: Stop after this many pages (None or <= 0 = no limit)
            row_goal: Stop once this many rows from ``start`` are covered

        Returns:
            Windows in fetch order; empty when ``start`` is at or past the total
        """
        total = plan.total_count
        end = total
        if row_goal is not None and row_goal > 0:
            end = min(total, start + row_goal)
        if max_pages is not None and max_pages <= 0:
            max_pages = None

        windows: list[PageWindow] = []
        offset = start
        while offset < end:
            if max_pages is not None and len(windows) >= max_pages:
                break
            limit = min(plan.page_size, total - offset)
            windows.append(PageWindow(offset=offset, limit=limit, index=len(windows)))
            offset += plan.page_size
        return windows

    async def _fetch_range(
        self,
        plan: PagingPlan,
        *,
        start: int,
        max_pages: int | None = None,
        row_goal: int | None = None,
    ) -> list[Response]:
        pages: list[Response] = []
        for window in self.windows(plan, start=start, max_pages=max_pages, row_goal=row_goal):
            reused = reusable_page(plan, window)
            if reused is not None:
                pages.append(reused)
                log_page_fetched(
                    resource=plan.resource,
                    window=window,
                    status_code=plan.discovery_response.status_code,
                    reused=True,
                )
                continue

            page_start = perf_counter()
            try:
                response = await fetch_window(
                    self._t, plan.resource, plan.version, plan.filter, window
                )
            except Exception as e:
                log_paging_error(
                    resource=plan.resource,
                    page_index=window.index,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise
            log_page_fetched(
                resource=plan.resource,
                window=window,
                status_code=response.status_code,
                latency_ms=(perf_counter() - page_start) * 1000.0,
            )
            pages.append(response)
        return pages

"""Paging plan and page window definitions.

This module defines the data structures the resolver hands to the fetch
loop and the assembler: the resolved plan for one run and the window
(offset, limit) of each page request.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import PagingStrategy
from ...core.filters import PageFilter
from ...core.response import Response


@dataclass(frozen=True)
class PageWindow:
    """Offset and limit of a single page request.

    Attributes:
        offset: Zero-based index of the first row
        limit: Number of rows requested (None when no limit was sent)
        index: Zero-based position of this page in the run
    """

    offset: int
    limit: int | None
    index: int = 0

    def same_range(self, other: PageWindow | None) -> bool:
        return other is not None and self.offset == other.offset and self.limit == other.limit


@dataclass(frozen=True)
class PagingPlan:
    """Fully resolved description of one paging run.

    Attributes:
        resource: Resource name
        version: Media type (never empty)
        filter: Filter payload passed through unchanged
        page_size: Effective page size (> 0)
        offset: Effective offset (>= 0)
        total_count: Server-reported total matching rows (>= 0)
        strategy: Paging strategy
        page_count: Page limit (None unless the strategy is page-limited)
        row_count: Row limit (None unless the strategy is row-limited)
        needs_fetch_loop: False when the discovery page already covers the request
        discovery_response: Page fetched (or supplied) during resolution
        discovery_window: Window the discovery page covers
    """

    resource: str
    version: str
    filter: PageFilter | None
    page_size: int
    offset: int
    total_count: int
    strategy: PagingStrategy
    page_count: int | None
    row_count: int | None
    needs_fetch_loop: bool
    discovery_response: Response
    discovery_window: PageWindow

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("PagingPlan page_size must be positive")
        if self.offset < 0:
            raise ValueError("PagingPlan offset cannot be negative")
        if self.total_count < 0:
            raise ValueError("PagingPlan total_count cannot be negative")

    @property
    def rows_needed(self) -> int:
        return rows_needed(
            self.strategy,
            total_count=self.total_count,
            offset=self.offset,
            page_size=self.page_size,
            page_count=self.page_count,
            row_count=self.row_count,
        )


def rows_needed(
    strategy: PagingStrategy,
    *,
    total_count: int,
    offset: int,
    page_size: int,
    page_count: int | None,
    row_count: int | None,
) -> int:
    """Number of rows a run must return, starting at ``offset``.

    Never exceeds what the server holds past the offset.
    """
    remaining = max(total_count - offset, 0)
    if strategy.is_row_limited and row_count is not None:
        return min(remaining, row_count)
    if strategy.is_page_limited and page_count is not None:
        return min(remaining, page_count * page_size)
    return remaining

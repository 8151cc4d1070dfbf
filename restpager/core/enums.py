"""Core enumerations shared by the paging runtime and the client facade.

Architecture:
    String enums keep values readable in logs and telemetry payloads. The
    six paging strategies are the only termination policies the fetch loop
    knows about; output shapes select how fetched pages are handed back.

Key Types:
    - PagingStrategy: How far and from where a paging run goes
    - OutputShape: What a paging run returns
    - FilterKind: How a filter payload is attached to a page request
    - PipelineState: Lifecycle of one paging run
"""

from enum import Enum


class PagingStrategy(str, Enum):
    """Paging termination policy resolved from the caller's optional limits."""

    ALL = "all"
    COUNT_PAGES = "count_pages"
    FROM_OFFSET = "from_offset"
    FROM_OFFSET_COUNT_PAGES = "from_offset_count_pages"
    ROW_LIMIT = "row_limit"
    FROM_OFFSET_ROW_LIMIT = "from_offset_row_limit"

    @property
    def is_row_limited(self) -> bool:
        return self in (PagingStrategy.ROW_LIMIT, PagingStrategy.FROM_OFFSET_ROW_LIMIT)

    @property
    def is_page_limited(self) -> bool:
        return self in (PagingStrategy.COUNT_PAGES, PagingStrategy.FROM_OFFSET_COUNT_PAGES)

    def __str__(self) -> str:
        return self.value


class OutputShape(str, Enum):
    """Shape of the collection returned by a paging run."""

    RESPONSES = "responses"
    PAGE_STRINGS = "page_strings"
    PAGE_RECORDS = "page_records"
    ROW_STRINGS = "row_strings"
    ROW_RECORDS = "row_records"

    @property
    def is_row_based(self) -> bool:
        return self in (OutputShape.ROW_STRINGS, OutputShape.ROW_RECORDS)


class FilterKind(str, Enum):
    """How a filter payload travels with a page request."""

    CRITERIA = "criteria"
    NAMED_QUERY = "named_query"
    FILTER_MAP = "filter_map"
    QUERY_API = "query_api"


class PipelineState(str, Enum):
    """Lifecycle of a single paging run."""

    CREATED = "created"
    RESOLVING = "resolving"
    SHORTCUT_DONE = "shortcut_done"
    FETCHING = "fetching"
    ASSEMBLING = "assembling"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineState.COMPLETE, PipelineState.FAILED)

"""Paging request model and fluent builder.

Architecture:
    PagingRequest is the single description of what a caller wants from a
    paged resource. Every optional limit is a plain optional field instead
    of a separate entry point per combination; the resolver decides the
    paging strategy from which limits are present.

Design Decisions:
    - Frozen dataclass: a request is private to one paging run
    - Negative or zero limits are kept as given and mean "unspecified"
    - Empty resources are not rejected here; the resolver and the client
      facade decide whether that is an error or an empty result
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .filters import PageFilter
from .response import Response

__all__ = ["PagingRequest", "PagingRequestBuilder", "paging_request"]


@dataclass(frozen=True)
class PagingRequest:
    """What a caller wants from a paged resource.

    Attributes:
        resource: Resource name, e.g. "student-cohorts"
        version: Media type sent as Accept/Content-Type (None = default)
        filter: Optional encoded filter payload
        page_size: Explicit page size (None or <= 0 = server maximum)
        offset: First row to return (None or < 0 = start at 0)
        page_count: Maximum pages to fetch (None or <= 0 = unlimited)
        row_count: Maximum rows to return (None or <= 0 = unlimited)
        initial_response: A page the caller already fetched
    """

    resource: str
    version: str | None = None
    filter: PageFilter | None = None
    page_size: int | None = None
    offset: int | None = None
    page_count: int | None = None
    row_count: int | None = None
    initial_response: Response | None = None

    def with_initial_response(self, response: Response) -> PagingRequest:
        return replace(self, initial_response=response)


class PagingRequestBuilder:
    """Fluent builder for PagingRequest.

    Example:
        >>> request = (PagingRequestBuilder("persons")
        ...     .page_size(50)
        ...     .from_offset(100)
        ...     .for_rows(120)
        ...     .build())
    """

    def __init__(self, resource: str) -> None:
        self._resource = resource
        self._version: str | None = None
        self._filter: PageFilter | None = None
        self._page_size: int | None = None
        self._offset: int | None = None
        self._page_count: int | None = None
        self._row_count: int | None = None
        self._initial_response: Response | None = None

    def version(self, version: str | None) -> PagingRequestBuilder:
        self._version = version
        return self

    def filter(self, page_filter: PageFilter | None) -> PagingRequestBuilder:
        self._filter = page_filter
        return self

    def page_size(self, page_size: int | None) -> PagingRequestBuilder:
        self._page_size = page_size
        return self

    def from_offset(self, offset: int | None) -> PagingRequestBuilder:
        self._offset = offset
        return self

    def for_pages(self, page_count: int | None) -> PagingRequestBuilder:
        self._page_count = page_count
        return self

    def for_rows(self, row_count: int | None) -> PagingRequestBuilder:
        self._row_count = row_count
        return self

    def with_initial_response(self, response: Response | None) -> PagingRequestBuilder:
        self._initial_response = response
        return self

    def build(self) -> PagingRequest:
        return PagingRequest(
            resource=self._resource,
            version=self._version,
            filter=self._filter,
            page_size=self._page_size,
            offset=self._offset,
            page_count=self._page_count,
            row_count=self._row_count,
            initial_response=self._initial_response,
        )


def paging_request(resource: str, **kwargs: object) -> PagingRequest:
    """Convenience factory: ``paging_request("persons", page_size=10, offset=5)``."""
    builder = PagingRequestBuilder(resource)
    setters = {
        "version": builder.version,
        "filter": builder.filter,
        "page_size": builder.page_size,
        "offset": builder.from_offset,
        "page_count": builder.for_pages,
        "row_count": builder.for_rows,
        "initial_response": builder.with_initial_response,
    }
    for key, value in kwargs.items():
        if key not in setters:
            raise TypeError(f"unknown paging request field: {key}")
        setters[key](value)
    return builder.build()

"""Core components."""

from .enums import FilterKind, OutputShape, PagingStrategy, PipelineState
from .exceptions import (
    InvalidArgumentError,
    PagingError,
    ParseError,
    RateLimitError,
    TransportError,
)
from .filters import PageFilter
from .request import PagingRequest, PagingRequestBuilder, paging_request
from .response import Response

__all__ = [
    "FilterKind",
    "OutputShape",
    "PagingStrategy",
    "PipelineState",
    "PagingError",
    "InvalidArgumentError",
    "TransportError",
    "RateLimitError",
    "ParseError",
    "PageFilter",
    "PagingRequest",
    "PagingRequestBuilder",
    "paging_request",
    "Response",
]

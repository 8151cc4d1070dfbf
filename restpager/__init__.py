"""restpager - paging engine for filterable REST resource endpoints."""

from .api import PagingClient
from .config import DEFAULT_MAX_PAGE_SIZE, DEFAULT_VERSION, PagerSettings
from .core import (
    FilterKind,
    InvalidArgumentError,
    OutputShape,
    PageFilter,
    PagingError,
    PagingRequest,
    PagingRequestBuilder,
    PagingStrategy,
    ParseError,
    PipelineState,
    RateLimitError,
    Response,
    TransportError,
    paging_request,
)
from .runtime.paging import (
    FetchLoop,
    PagingCoordinator,
    PagingHandle,
    PagingPipeline,
    PagingPlan,
    PagingResolver,
    ResultAssembler,
    select_strategy,
)
from .runtime.rest import HTTPClient, PageTransport, RESTTransport

__version__ = "0.1.0"

__all__ = [
    "PagingClient",
    "PagerSettings",
    "DEFAULT_MAX_PAGE_SIZE",
    "DEFAULT_VERSION",
    # Core
    "FilterKind",
    "OutputShape",
    "PagingStrategy",
    "PipelineState",
    "PageFilter",
    "PagingRequest",
    "PagingRequestBuilder",
    "paging_request",
    "Response",
    # Errors
    "PagingError",
    "InvalidArgumentError",
    "TransportError",
    "RateLimitError",
    "ParseError",
    # Paging runtime
    "FetchLoop",
    "PagingCoordinator",
    "PagingHandle",
    "PagingPipeline",
    "PagingPlan",
    "PagingResolver",
    "ResultAssembler",
    "select_strategy",
    # Transport
    "HTTPClient",
    "PageTransport",
    "RESTTransport",
]

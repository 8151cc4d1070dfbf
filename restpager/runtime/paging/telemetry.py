"""Structured logging for paging runs.

This module provides telemetry hooks for the resolver and the fetch loop,
emitting structured log records with the plan and page details.
"""

from __future__ import annotations

import logging

from .definitions import PageWindow, PagingPlan

logger = logging.getLogger(__name__)


def log_paging_plan(plan: PagingPlan) -> None:
    """Log a resolved paging plan."""
    logger.info(
        "paging_plan_resolved",
        extra={
            "resource": plan.resource,
            "strategy": plan.strategy.value,
            "page_size": plan.page_size,
            "offset": plan.offset,
            "total_count": plan.total_count,
            "page_count": plan.page_count,
            "row_count": plan.row_count,
            "needs_fetch_loop": plan.needs_fetch_loop,
            "filter": plan.filter.encoded if plan.filter else None,
        },
    )


def log_page_fetched(
    *,
    resource: str,
    window: PageWindow,
    status_code: int,
    latency_ms: float | None = None,
    reused: bool = False,
) -> None:
    """Log a single page of a run.

    Args:
        resource: Resource name
        window: Offset/limit of the page
        status_code: HTTP status of the page response
        latency_ms: Request latency (None for reused pages)
        reused: Whether the discovery page stood in for this request
    """
    logger.debug(
        "page_reused" if reused else "page_fetched",
        extra={
            "resource": resource,
            "page_index": window.index,
            "offset": window.offset,
            "limit": window.limit,
            "status_code": status_code,
            "latency_ms": latency_ms,
        },
    )


def log_paging_complete(
    *,
    resource: str,
    strategy: str,
    pages: int,
    total_latency_ms: float | None = None,
) -> None:
    logger.info(
        "paging_complete",
        extra={
            "resource": resource,
            "strategy": strategy,
            "pages": pages,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_paging_error(
    *,
    resource: str,
    page_index: int | None,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed paging run.

    Args:
        resource: Resource name
        page_index: Page that failed (None if it failed outside the loop)
        error_type: Exception class name
        error_message: Exception message
    """
    logger.error(
        "paging_error",
        extra={
            "resource": resource,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )

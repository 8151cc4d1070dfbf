"""Paging runtime: strategy resolution, fetch loop and result assembly.

Architecture:
    - definitions.py: PagingPlan and PageWindow
    - selector.py: strategy decision table
    - resolver.py: discovery fetch and plan resolution
    - loop.py: per-strategy fetch loops over a shared range primitive
    - converters.py: stateless response conversions
    - assembler.py: trimming and output shapes
    - pipeline.py: resolve, fetch, assemble
    - coordinator.py: background runs behind awaitable handles
    - telemetry.py: structured logging
"""

from __future__ import annotations

from .assembler import ResultAssembler, check_output
from .coordinator import PagingCoordinator, PagingHandle
from .definitions import PageWindow, PagingPlan, rows_needed
from .loop import FetchLoop, fetch_window
from .pipeline import PagingPipeline
from .resolver import (
    PagingResolver,
    read_max_page_size,
    read_total_count,
    resolve_page_size,
    resolve_version,
)
from .selector import STRATEGY_TABLE, select_strategy

__all__ = [
    "FetchLoop",
    "PageWindow",
    "PagingCoordinator",
    "PagingHandle",
    "PagingPipeline",
    "PagingPlan",
    "PagingResolver",
    "ResultAssembler",
    "STRATEGY_TABLE",
    "check_output",
    "fetch_window",
    "read_max_page_size",
    "read_total_count",
    "resolve_page_size",
    "resolve_version",
    "rows_needed",
    "select_strategy",
]

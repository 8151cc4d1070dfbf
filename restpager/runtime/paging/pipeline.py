"""Paging pipeline: resolve, fetch, assemble."""

from __future__ import annotations

import logging
from collections.abc import Callable
from time import perf_counter
from typing import Any

from pydantic import BaseModel

from ...core.enums import OutputShape, PipelineState
from ...core.request import PagingRequest
from ..rest.transport import PageTransport
from .assembler import ResultAssembler, check_output
from .loop import FetchLoop
from .resolver import PagingResolver
from .telemetry import log_paging_complete, log_paging_error

logger = logging.getLogger(__name__)

StateListener = Callable[[PipelineState], None]


class PagingPipeline:
    """Runs one paging request end to end.

    Pages are awaited one at a time. A failure anywhere aborts the run and
    propagates; nothing fetched before the failure is returned.
    """

    def __init__(
        self,
        transport: PageTransport,
        *,
        resolver: PagingResolver | None = None,
        fetch_loop: FetchLoop | None = None,
        assembler: ResultAssembler | None = None,
    ) -> None:
        self._resolver = resolver or PagingResolver(transport)
        self._loop = fetch_loop or FetchLoop(transport)
        self._assembler = assembler or ResultAssembler()

    @property
    def resolver(self) -> PagingResolver:
        return self._resolver

    async def run(
        self,
        request: PagingRequest,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
        *,
        on_state: StateListener | None = None,
    ) -> list[Any]:
        """Run the request and return the assembled collection.

        Args:
            request: What to page
            shape: Output shape
            model: Optional pydantic model for typed rows
            on_state: Called on every state transition

        Raises:
            InvalidArgumentError: Empty resource or bad shape/model combination
            TransportError: A page request failed
            ParseError: Page content is not valid JSON
        """
        state = PipelineState.CREATED

        def advance(new_state: PipelineState) -> None:
            nonlocal state
            state = new_state
            if on_state is not None:
                on_state(new_state)

        started = perf_counter()
        try:
            check_output(shape, model)
            advance(PipelineState.RESOLVING)
            plan = await self._resolver.resolve(request)
            if plan.needs_fetch_loop:
                advance(PipelineState.FETCHING)
                pages = await self._loop.fetch(plan)
            else:
                advance(PipelineState.SHORTCUT_DONE)
                pages = None
            advance(PipelineState.ASSEMBLING)
            result = self._assembler.assemble(plan, pages, shape, model)
        except Exception as e:
            # The fetch loop logs its own page failures
            if state != PipelineState.FETCHING:
                log_paging_error(
                    resource=request.resource,
                    page_index=None,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            advance(PipelineState.FAILED)
            raise

        advance(PipelineState.COMPLETE)
        log_paging_complete(
            resource=plan.resource,
            strategy=plan.strategy.value,
            pages=len(pages) if pages is not None else 1,
            total_latency_ms=(perf_counter() - started) * 1000.0,
        )
        return result

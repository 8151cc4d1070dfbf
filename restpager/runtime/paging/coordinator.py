"""Background paging runs exposed through awaitable handles.

Architecture:
    Each submitted request runs the whole pipeline as one asyncio task. The
    task is still strictly sequential inside; submitting does not fetch
    pages in parallel. The handle tracks the pipeline state and resolves
    with the assembled collection, or carries the first failure.

Design Decisions:
    - Cancelling a handle detaches the caller only. The pipeline task is
      shielded and runs to COMPLETE or FAILED, so in-flight page requests
      are never aborted halfway
    - The coordinator holds strong references to running tasks until they
      finish
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Generator
from typing import Any

from pydantic import BaseModel

from ...core.enums import OutputShape, PipelineState
from ...core.request import PagingRequest
from .pipeline import PagingPipeline

logger = logging.getLogger(__name__)


class PagingHandle:
    """Awaitable handle of a background paging run."""

    def __init__(self, request: PagingRequest) -> None:
        self.request = request
        self._state = PipelineState.CREATED
        self._task: asyncio.Task[list[Any]] | None = None
        self._detached = False

    @property
    def state(self) -> PipelineState:
        return self._state

    def _set_state(self, state: PipelineState) -> None:
        self._state = state

    def _attach(self, task: asyncio.Task[list[Any]]) -> None:
        self._task = task

    def done(self) -> bool:
        if self._detached or self._state.is_terminal:
            return True
        return self._task is not None and self._task.done()

    def cancelled(self) -> bool:
        return self._detached

    def cancel(self) -> bool:
        """Detach from the run. Returns False if it already finished."""
        if self._detached or self._state.is_terminal:
            return False
        if self._task is None or self._task.done():
            return False
        self._detached = True
        logger.info(
            "paging_handle_cancelled",
            extra={"resource": self.request.resource, "state": self._state.value},
        )
        return True

    def exception(self) -> BaseException | None:
        """Failure of a finished run, None if it succeeded.

        Raises:
            asyncio.CancelledError: If the handle was cancelled
            asyncio.InvalidStateError: If the run has not finished
        """
        if self._detached:
            raise asyncio.CancelledError()
        if self._task is None or not self._task.done():
            raise asyncio.InvalidStateError("paging run has not finished")
        return self._task.exception()

    async def result(self) -> list[Any]:
        """Wait for the assembled collection."""
        if self._detached:
            raise asyncio.CancelledError()
        if self._task is None:
            raise asyncio.InvalidStateError("paging run was never started")
        return await asyncio.shield(self._task)

    def __await__(self) -> Generator[Any, None, list[Any]]:
        return self.result().__await__()


class PagingCoordinator:
    """Submits paging requests to run in the background."""

    def __init__(self, pipeline: PagingPipeline) -> None:
        self._pipeline = pipeline
        self._tasks: set[asyncio.Task[list[Any]]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(
        self,
        request: PagingRequest,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
    ) -> PagingHandle:
        """Start a paging run on the running event loop.

        Every failure, including an empty resource name, surfaces through
        the returned handle.
        """
        handle = PagingHandle(request)
        task = asyncio.get_running_loop().create_task(
            self._pipeline.run(request, shape, model, on_state=handle._set_state),
            name=f"restpager:{request.resource}",
        )
        handle._attach(task)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return handle

    def _on_done(self, task: asyncio.Task[list[Any]]) -> None:
        self._tasks.discard(task)
        # Mark the failure as retrieved; the handle still reports it.
        if not task.cancelled():
            task.exception()

    async def drain(self) -> None:
        """Wait for every submitted run to reach a terminal state."""
        if self._tasks:
            await asyncio.wait(set(self._tasks))

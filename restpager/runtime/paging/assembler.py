"""Result assembly: fetched pages to the caller's output shape.

Row limits are enforced here, not in the fetch loop: the loop may fetch
more rows than asked for, and the assembler trims the page list so the
run yields exactly the rows requested. When the discovery page already
answered the request, it is trimmed in place of any fetched pages.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from pydantic import BaseModel

from ...core.enums import OutputShape
from ...core.exceptions import InvalidArgumentError
from ...core.response import Response
from . import converters
from .definitions import PagingPlan

_SHAPES: dict[OutputShape, Callable[[Sequence[Response]], list[Any]]] = {
    OutputShape.RESPONSES: list,
    OutputShape.PAGE_STRINGS: converters.to_page_strings,
    OutputShape.PAGE_RECORDS: converters.to_page_records,
    OutputShape.ROW_STRINGS: converters.to_row_strings,
    OutputShape.ROW_RECORDS: converters.to_row_records,
}


def check_output(shape: OutputShape, model: type[BaseModel] | None = None) -> None:
    """Reject shape/model combinations before any request goes out."""
    if shape not in _SHAPES:
        raise InvalidArgumentError(f"Unsupported output shape: {shape!r}")
    if model is not None and not shape.is_row_based:
        raise InvalidArgumentError(
            f"Typed rows need a row-based output shape, got {shape.value}"
        )


class ResultAssembler:
    """Builds the output collection of a paging run."""

    def assemble(
        self,
        plan: PagingPlan,
        pages: list[Response] | None,
        shape: OutputShape = OutputShape.RESPONSES,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Assemble fetched pages (or the discovery page) into ``shape``.

        Args:
            plan: Resolved plan of the run
            pages: Pages from the fetch loop, or None when the loop was skipped
            shape: Output shape
            model: Optional pydantic model each row is validated into

        Returns:
            List of responses, strings, records or model instances
        """
        check_output(shape, model)
        if pages is None:
            pages = self.trim_discovery(plan)
        elif plan.strategy.is_row_limited:
            pages = self.trim_to_rows(pages, plan.rows_needed)

        if model is not None:
            return converters.to_typed_rows(pages, model)
        return _SHAPES[shape](pages)

    def trim_discovery(self, plan: PagingPlan) -> list[Response]:
        """Cut the discovery page down to the rows the plan asks for."""
        start = plan.offset - plan.discovery_window.offset
        count = None
        if plan.strategy.is_row_limited:
            count = plan.rows_needed
        elif plan.strategy.is_page_limited and plan.page_count is not None:
            # At most n pages of page_size rows, whatever the total says
            count = plan.page_count * plan.page_size
        return [converters.slice_content(plan.discovery_response, start, count)]

    def trim_to_rows(self, pages: Sequence[Response], row_limit: int) -> list[Response]:
        """Keep pages until ``row_limit`` rows are covered, trimming the last one."""
        kept: list[Response] = []
        remaining = row_limit
        for page in pages:
            if remaining <= 0:
                break
            rows = len(converters.rows_of(page))
            if rows <= remaining:
                kept.append(page)
                remaining -= rows
            else:
                kept.append(converters.slice_content(page, 0, remaining))
                remaining = 0
        return kept

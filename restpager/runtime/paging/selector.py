"""Paging strategy selection.

The strategy is a pure function of which optional limits the caller gave.
A limit counts as given only when it is positive; an offset of 0 pages
exactly like no offset at all. Row limits win over page limits, and an
offset combines with either.
"""

from __future__ import annotations

from ...core.enums import PagingStrategy

# (offset given, page count given, row count given) -> strategy
STRATEGY_TABLE: dict[tuple[bool, bool, bool], PagingStrategy] = {
    (False, False, False): PagingStrategy.ALL,
    (False, True, False): PagingStrategy.COUNT_PAGES,
    (True, False, False): PagingStrategy.FROM_OFFSET,
    (True, True, False): PagingStrategy.FROM_OFFSET_COUNT_PAGES,
    (False, False, True): PagingStrategy.ROW_LIMIT,
    (False, True, True): PagingStrategy.ROW_LIMIT,
    (True, False, True): PagingStrategy.FROM_OFFSET_ROW_LIMIT,
    (True, True, True): PagingStrategy.FROM_OFFSET_ROW_LIMIT,
}


def is_given(value: int | None) -> bool:
    return value is not None and value > 0


def select_strategy(
    offset: int | None,
    page_count: int | None,
    row_count: int | None,
) -> PagingStrategy:
    """Map the caller's optional limits to one of the six strategies."""
    return STRATEGY_TABLE[(is_given(offset), is_given(page_count), is_given(row_count))]

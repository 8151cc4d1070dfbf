"""Stateless conversions from page responses to strings and records.

Every function here is pure: it reads responses and returns new values,
never mutating its input. Parsing failures raise ParseError.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ...core.exceptions import ParseError
from ...core.response import Response

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_content(response: Response) -> Any:
    """Parse a page body. Blank bodies parse to None."""
    if not response.content or not response.content.strip():
        return None
    try:
        return json.loads(response.content)
    except json.JSONDecodeError as e:
        raise ParseError(f"Malformed JSON in response from {response.requested_url}: {e}") from e


def dump_row(row: Any) -> str:
    return json.dumps(row, separators=(",", ":"), ensure_ascii=False)


def rows_of(response: Response) -> list[Any]:
    """Rows of a page: array elements, or the whole body as one row."""
    parsed = parse_content(response)
    if parsed is None:
        return []
    if isinstance(parsed, list):
        return parsed
    return [parsed]


def array_length(response: Response) -> int | None:
    """Top-level element count of an array body, None for anything else."""
    try:
        parsed = parse_content(response)
    except ParseError:
        return None
    if isinstance(parsed, list):
        return len(parsed)
    return None


def slice_content(response: Response, start: int = 0, count: int | None = None) -> Response:
    """Return a page holding only rows ``[start, start + count)``.

    Non-array bodies and slices that keep every row return the response
    itself.
    """
    parsed = parse_content(response)
    if not isinstance(parsed, list):
        return response
    start = max(start, 0)
    end = len(parsed) if count is None else min(len(parsed), start + max(count, 0))
    if start == 0 and end >= len(parsed):
        return response
    return response.with_content(dump_row(parsed[start:end]))


def to_page_strings(pages: Sequence[Response]) -> list[str]:
    return [page.content for page in pages]


def to_page_records(pages: Sequence[Response]) -> list[Any]:
    return [parse_content(page) for page in pages]


def to_row_records(pages: Sequence[Response]) -> list[Any]:
    rows: list[Any] = []
    for page in pages:
        rows.extend(rows_of(page))
    return rows


def to_row_strings(pages: Sequence[Response]) -> list[str]:
    return [dump_row(row) for row in to_row_records(pages)]


def to_typed_rows(pages: Sequence[Response], model: type[ModelT]) -> list[ModelT]:
    """Validate every row into ``model``."""
    adapter = TypeAdapter(list[model])  # type: ignore[valid-type]
    try:
        return adapter.validate_python(to_row_records(pages))
    except PydanticValidationError as e:
        raise ParseError(f"Rows do not match {model.__name__}: {e}") from e

"""Filter payloads passed through to page requests.

The paging runtime treats a filter as opaque: it only ever asks for the
query parameters (and, for the query API, the request body) to send.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from .enums import FilterKind
from .exceptions import InvalidArgumentError

CRITERIA_PARAM = "criteria"


def _as_json(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


@dataclass(frozen=True)
class PageFilter:
    """Encoded filter payload.

    Attributes:
        kind: How the payload is attached to the request
        params: Query parameters merged into every page request
        body: JSON body for query API requests (None otherwise)
    """

    kind: FilterKind
    params: tuple[tuple[str, str], ...] = ()
    body: str | None = None

    @classmethod
    def criteria(cls, criteria: Mapping[str, Any] | str) -> PageFilter:
        """Criteria filter, sent as ``?criteria=<json>``.

        A string may carry a leading ``?criteria=`` which is stripped.
        """
        if not criteria:
            raise InvalidArgumentError("criteria filter cannot be empty")
        encoded = _as_json(criteria)
        prefix = f"?{CRITERIA_PARAM}="
        if encoded.startswith(prefix):
            encoded = encoded[len(prefix):]
        return cls(kind=FilterKind.CRITERIA, params=((CRITERIA_PARAM, encoded),))

    @classmethod
    def named_query(cls, name: str, value: Mapping[str, Any] | str) -> PageFilter:
        """Named query filter, sent as ``?<name>=<json>``."""
        if not name or not name.strip():
            raise InvalidArgumentError("named query name cannot be blank")
        return cls(kind=FilterKind.NAMED_QUERY, params=((name, _as_json(value)),))

    @classmethod
    def filter_map(cls, pairs: Mapping[str, Any]) -> PageFilter:
        """Plain key/value filter, sent as ``?key=value&...``."""
        if not pairs:
            raise InvalidArgumentError("filter map cannot be empty")
        return cls(
            kind=FilterKind.FILTER_MAP,
            params=tuple((str(key), str(value)) for key, value in pairs.items()),
        )

    @classmethod
    def query_api(cls, body: Mapping[str, Any] | str) -> PageFilter:
        """Free-form query API body, POSTed to the ``/qapi`` endpoint."""
        if not body:
            raise InvalidArgumentError("query API body cannot be empty")
        return cls(kind=FilterKind.QUERY_API, body=_as_json(body))

    def query_params(self) -> dict[str, str]:
        return dict(self.params)

    @property
    def encoded(self) -> str:
        """Opaque string form, used for logging."""
        if self.kind == FilterKind.QUERY_API:
            return self.body or ""
        return urlencode(self.params)

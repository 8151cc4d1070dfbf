"""Shared fixtures: an in-memory paged resource server."""

from __future__ import annotations

import asyncio
import json
from urllib.parse import urlencode

import pytest

from restpager.core import Response, TransportError


class FakeResourceServer:
    """PageTransport serving ``total`` rows of ``{"id": n}``.

    Honors ``offset``/``limit`` like the real endpoint: a missing limit
    returns ``default_page`` rows and every limit is capped at
    ``max_page_size``.
    """

    def __init__(
        self,
        total: int = 100,
        *,
        max_page_size: int = 500,
        default_page: int = 25,
        send_headers: bool = True,
        fail_on_call: int | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.total = total
        self.max_page_size = max_page_size
        self.default_page = default_page
        self.send_headers = send_headers
        self.fail_on_call = fail_on_call
        self.gate = gate
        self.calls: list[dict] = []

    async def fetch_page(self, resource, version, query, *, body=None) -> Response:
        self.calls.append(
            {"resource": resource, "version": version, "query": dict(query), "body": body}
        )
        if self.gate is not None:
            await self.gate.wait()
        url = f"https://fake.test/api/{resource}"
        if query:
            url = f"{url}?{urlencode(query)}"
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise TransportError(f"GET {url} failed with status 503", status_code=503, url=url)

        offset = int(query.get("offset", 0))
        limit = int(query["limit"]) if "limit" in query else self.default_page
        limit = min(limit, self.max_page_size)
        rows = [{"id": n} for n in range(offset, min(offset + limit, self.total))]
        headers = {}
        if self.send_headers:
            headers = {
                "X-Total-Count": str(self.total),
                "X-Max-Page-Size": str(self.max_page_size),
            }
        return Response(headers=headers, content=json.dumps(rows), status_code=200, requested_url=url)

    @property
    def queries(self) -> list[dict]:
        return [call["query"] for call in self.calls]

    @property
    def urls(self) -> list[str]:
        return [
            f"/api/{call['resource']}?{urlencode(call['query'])}" for call in self.calls
        ]


@pytest.fixture
def server_factory():
    """Build a FakeResourceServer with custom settings."""

    def _make(total: int = 100, **kwargs) -> FakeResourceServer:
        return FakeResourceServer(total, **kwargs)

    return _make


@pytest.fixture
def server() -> FakeResourceServer:
    return FakeResourceServer(100)

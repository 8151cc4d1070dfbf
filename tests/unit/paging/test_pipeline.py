"""End-to-end tests of PagingPipeline against the fake resource server.

Covers the paging scenarios callers rely on: request counts, last page
limits, discovery reuse, the single-request shortcut and failure
propagation.
"""

import json
import logging

import pytest

from restpager.core.enums import OutputShape, PipelineState
from restpager.core.exceptions import InvalidArgumentError, TransportError
from restpager.core.request import PagingRequest
from restpager.core.response import Response
from restpager.runtime.paging import PagingPipeline


def ids(rows) -> list[int]:
    return [row["id"] for row in rows]


class TestPagingScenarios:
    """Test request counts and assembled rows per strategy."""

    @pytest.mark.asyncio
    async def test_from_offset(self, server):
        """Test T=100, P=10, O=30 returns 7 pages and rows 30..99."""
        request = PagingRequest(resource="persons", page_size=10, offset=30)
        pages = await PagingPipeline(server).run(request)
        assert len(pages) == 7
        # The first window is the discovery request itself
        assert len(server.calls) == 7
        rows = await PagingPipeline(server).run(request, OutputShape.ROW_RECORDS)
        assert ids(rows) == list(range(30, 100))

    @pytest.mark.asyncio
    async def test_from_offset_short_last_page(self, server_factory):
        server = server_factory(95)
        request = PagingRequest(resource="persons", page_size=10, offset=30)
        pages = await PagingPipeline(server).run(request)
        assert len(pages) == 7
        assert server.queries[-1] == {"offset": "90", "limit": "5"}

    @pytest.mark.asyncio
    async def test_from_offset_count_pages(self, server):
        request = PagingRequest(resource="persons", page_size=10, offset=30, page_count=4)
        pages = await PagingPipeline(server).run(request)
        assert len(pages) == 4
        assert all(q["limit"] == "10" for q in server.queries)

    @pytest.mark.asyncio
    async def test_count_pages_past_end(self, server_factory):
        """Test asking for more pages than exist stops at the total."""
        server = server_factory(25)
        request = PagingRequest(resource="persons", page_size=10, page_count=5)
        rows = await PagingPipeline(server).run(request, OutputShape.ROW_RECORDS)
        assert ids(rows) == list(range(25))
        assert len(server.calls) == 3

    @pytest.mark.asyncio
    async def test_from_offset_row_limit(self, server):
        """Test T=100, P=30, O=20, r=40 yields exactly rows 20..59."""
        request = PagingRequest(resource="persons", page_size=30, offset=20, row_count=40)
        rows = await PagingPipeline(server).run(request, OutputShape.ROW_RECORDS)
        assert ids(rows) == list(range(20, 60))
        assert len(server.calls) == 2

    @pytest.mark.asyncio
    async def test_row_limit_larger_than_resource(self, server_factory):
        server = server_factory(25)
        request = PagingRequest(resource="persons", page_size=10, row_count=40)
        rows = await PagingPipeline(server).run(request, OutputShape.ROW_RECORDS)
        assert ids(rows) == list(range(25))

    @pytest.mark.asyncio
    async def test_all_with_server_page_size(self, server_factory):
        """Test ALL without a page size pages by the discovery page's row count."""
        server = server_factory(60, default_page=25)
        pages = await PagingPipeline(server).run(PagingRequest(resource="persons"))
        assert len(pages) == 3
        # The unlimited discovery page stands in for the first window
        assert server.queries == [
            {"offset": "0"},
            {"offset": "25", "limit": "25"},
            {"offset": "50", "limit": "10"},
        ]

    @pytest.mark.asyncio
    async def test_from_offset_with_server_page_size(self, server_factory):
        """Test T=100, O=30 with a server page of 25 takes ceil(70 / 25) requests."""
        server = server_factory(100, default_page=25)
        request = PagingRequest(resource="persons", offset=30)
        rows = await PagingPipeline(server).run(request, OutputShape.ROW_RECORDS)
        assert ids(rows) == list(range(30, 100))
        assert len(server.calls) == 3
        assert server.queries[-1] == {"offset": "80", "limit": "20"}

    @pytest.mark.asyncio
    async def test_page_size_capped_by_server_reuses_first_page(self, server_factory):
        server = server_factory(100, max_page_size=50)
        request = PagingRequest(resource="persons", page_size=80)
        rows = await PagingPipeline(server).run(request, OutputShape.ROW_RECORDS)
        assert ids(rows) == list(range(100))
        assert server.queries == [
            {"offset": "0", "limit": "80"},
            {"offset": "50", "limit": "50"},
        ]

    @pytest.mark.asyncio
    async def test_page_count_with_oversized_first_page(self, server):
        """Test a supplied page larger than n pages is cut to n * page_size rows."""
        initial = Response(
            headers={"x-total-count": "100", "x-max-page-size": "500"},
            content=json.dumps([{"id": n} for n in range(100)]),
            requested_url="https://fake.test/api/persons?offset=0&limit=100",
        )
        request = PagingRequest(
            resource="persons", page_size=10, page_count=2, initial_response=initial
        )
        rows = await PagingPipeline(server).run(request, OutputShape.ROW_RECORDS)
        assert ids(rows) == list(range(20))
        assert server.calls == []

    @pytest.mark.asyncio
    async def test_unspecified_limits_page_everything(self, server_factory):
        server = server_factory(30)
        request = PagingRequest(resource="persons", page_size=10, offset=-1, page_count=-1)
        rows = await PagingPipeline(server).run(request, OutputShape.ROW_RECORDS)
        assert ids(rows) == list(range(30))
        assert len(server.calls) == 3

    @pytest.mark.asyncio
    async def test_offset_past_total(self, server_factory):
        """Test an offset beyond the resource returns no rows after one request."""
        server = server_factory(20)
        request = PagingRequest(resource="persons", page_size=10, offset=50)
        assert await PagingPipeline(server).run(request, OutputShape.ROW_RECORDS) == []
        assert len(server.calls) == 1

    @pytest.mark.asyncio
    async def test_empty_resource_collection(self, server_factory):
        server = server_factory(0)
        pages = await PagingPipeline(server).run(PagingRequest(resource="persons"))
        assert len(pages) == 1
        assert pages[0].content == "[]"
        assert len(server.calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "limits",
        [
            {},
            {"page_count": 2},
            {"offset": 10},
            {"offset": 10, "page_count": 2},
            {"row_count": 5},
            {"offset": 10, "row_count": 5},
        ],
    )
    async def test_single_request_shortcut(self, server, limits):
        """Test a page size covering the total issues exactly one request."""
        request = PagingRequest(resource="persons", page_size=200, **limits)
        rows = await PagingPipeline(server).run(request, OutputShape.ROW_RECORDS)
        assert len(server.calls) == 1
        start = limits.get("offset", 0)
        expected = limits.get("row_count", 100 - start)
        assert ids(rows) == list(range(start, start + expected))

    @pytest.mark.asyncio
    async def test_repeatable(self, server):
        """Test the same request twice issues the same URLs in the same order."""
        request = PagingRequest(resource="persons", page_size=15, offset=7, row_count=50)
        await PagingPipeline(server).run(request)
        first = list(server.urls)
        server.calls.clear()
        await PagingPipeline(server).run(request)
        assert server.urls == first


class TestPipelineStates:
    """Test state transitions reported to on_state."""

    @pytest.mark.asyncio
    async def test_fetch_loop_states(self, server):
        states = []
        await PagingPipeline(server).run(
            PagingRequest(resource="persons", page_size=10), on_state=states.append
        )
        assert states == [
            PipelineState.RESOLVING,
            PipelineState.FETCHING,
            PipelineState.ASSEMBLING,
            PipelineState.COMPLETE,
        ]

    @pytest.mark.asyncio
    async def test_shortcut_states(self, server):
        states = []
        await PagingPipeline(server).run(
            PagingRequest(resource="persons", page_size=100), on_state=states.append
        )
        assert states == [
            PipelineState.RESOLVING,
            PipelineState.SHORTCUT_DONE,
            PipelineState.ASSEMBLING,
            PipelineState.COMPLETE,
        ]

    @pytest.mark.asyncio
    async def test_failure_state(self, server_factory):
        server = server_factory(100, fail_on_call=4)
        states = []
        with pytest.raises(TransportError):
            await PagingPipeline(server).run(
                PagingRequest(resource="persons", page_size=10), on_state=states.append
            )
        assert states[-1] == PipelineState.FAILED
        assert PipelineState.COMPLETE not in states
        assert len(server.calls) == 4


class TestPipelineErrors:
    """Test argument validation and error logging."""

    @pytest.mark.asyncio
    async def test_empty_resource(self, server):
        with pytest.raises(InvalidArgumentError):
            await PagingPipeline(server).run(PagingRequest(resource=""))
        assert server.calls == []

    @pytest.mark.asyncio
    async def test_model_requires_row_shape(self, server):
        from pydantic import BaseModel

        class Person(BaseModel):
            id: int

        with pytest.raises(InvalidArgumentError):
            await PagingPipeline(server).run(
                PagingRequest(resource="persons"), OutputShape.PAGE_RECORDS, Person
            )
        assert server.calls == []

    @pytest.mark.asyncio
    async def test_failure_logged_once(self, server_factory, caplog):
        server = server_factory(100, fail_on_call=2)
        with caplog.at_level(logging.ERROR):
            with pytest.raises(TransportError):
                await PagingPipeline(server).run(PagingRequest(resource="persons", page_size=10))
        errors = [r for r in caplog.records if r.getMessage() == "paging_error"]
        assert len(errors) == 1
        assert errors[0].page_index == 1

    @pytest.mark.asyncio
    async def test_plan_logged(self, server, caplog):
        with caplog.at_level(logging.INFO):
            await PagingPipeline(server).run(PagingRequest(resource="persons", page_size=100))
        messages = [r.getMessage() for r in caplog.records]
        assert "paging_plan_resolved" in messages
        assert "paging_complete" in messages

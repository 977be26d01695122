"""Tests for the page-indexed controller."""

import asyncio

import pytest

from pager.controllers import PageFetchController
from pager.core import FetchFailure, PageResult, StatusKind


def assert_page_bounds(controller: PageFetchController) -> None:
    assert 1 <= controller.current_page <= max(controller.total_pages, 1)


def test_initial_state(page_source):
    """Test a fresh controller before any fetch."""
    controller = PageFetchController(page_source.fetch, page_size=10)

    assert controller.current_page == 1
    assert controller.total_items == 0
    assert controller.total_pages == 0
    assert controller.items == ()
    assert controller.status.kind is StatusKind.IDLE
    assert not controller.has_next_page
    assert not controller.has_previous_page
    assert page_source.calls == []


def test_page_size_must_be_positive(page_source):
    """Test that a page size below 1 is refused."""
    with pytest.raises(ValueError):
        PageFetchController(page_source.fetch, page_size=0)


@pytest.mark.asyncio
async def test_load_first_page(page_source):
    """Test loading the first page commits items and totals."""
    controller = PageFetchController(page_source.fetch, page_size=10)

    status = await controller.load(1)

    assert status.is_idle
    assert controller.items == tuple(range(10))
    assert controller.total_items == 25
    assert controller.total_pages == 3
    assert controller.has_next_page
    assert not controller.has_previous_page
    assert page_source.calls == [(1, 10)]


@pytest.mark.asyncio
async def test_go_to_page_clamps_to_last_page(page_source):
    """Test pageSize=10, totalItems=25 clamps page 5 to page 3."""
    controller = PageFetchController(page_source.fetch, page_size=10)
    await controller.load(1)

    await controller.go_to_page(5)

    assert controller.total_pages == 3
    assert controller.current_page == 3
    assert controller.items == tuple(range(20, 25))
    assert not controller.has_next_page
    assert page_source.calls[-1] == (3, 10)


@pytest.mark.asyncio
async def test_go_to_page_clamps_below_first_page(page_source):
    """Test that pages below 1 are corrected to 1."""
    controller = PageFetchController(page_source.fetch, page_size=10)

    await controller.go_to_page(-4)

    assert controller.current_page == 1
    assert page_source.calls == [(1, 10)]


@pytest.mark.asyncio
async def test_go_to_page_with_unknown_bounds_settles_on_last_page(page_source):
    """Test clamping when the page count is only learned from the response."""
    controller = PageFetchController(page_source.fetch, page_size=10)

    status = await controller.go_to_page(5)

    assert status.is_idle
    assert controller.current_page == 3
    assert page_source.calls == [(5, 10), (3, 10)]


@pytest.mark.asyncio
async def test_go_to_page_without_reported_total_keeps_clamping():
    """Test clamping against a source that only estimates its size."""
    data = list(range(4))
    calls = []

    async def fetch(page: int, page_size: int) -> PageResult:
        calls.append(page)
        start = (page - 1) * page_size
        items = data[start : start + page_size]
        if not items and page > 1:
            estimate = (page - 2) * page_size + 1
        else:
            estimate = start + len(items) + (1 if len(items) == page_size else 0)
        return PageResult(items=items, total_items=estimate)

    controller = PageFetchController(fetch, page_size=2)

    status = await controller.go_to_page(9)

    assert status.is_idle
    assert controller.current_page == 2
    assert controller.items == (2, 3)
    assert calls == [9, 8, 7, 6, 5, 4, 3, 2]
    assert 1 <= controller.current_page <= controller.total_pages


@pytest.mark.asyncio
async def test_load_past_known_bounds_is_rejected(page_source):
    """Test that load() refuses pages beyond total_pages without fetching."""
    controller = PageFetchController(page_source.fetch, page_size=10)
    await controller.load(1)

    status = await controller.load(4)

    assert status.is_idle
    assert controller.current_page == 1
    assert page_source.calls == [(1, 10)]


@pytest.mark.asyncio
async def test_load_before_first_page_is_rejected(page_source):
    """Test that load(0) is a no-op."""
    controller = PageFetchController(page_source.fetch, page_size=10)

    await controller.load(0)

    assert page_source.calls == []
    assert controller.current_page == 1


@pytest.mark.asyncio
async def test_load_past_reported_bounds_fails_without_mutation(page_source):
    """Test load() on unknown bounds when the response says the page is out of range."""
    controller = PageFetchController(page_source.fetch, page_size=10)

    status = await controller.load(5)

    assert status.is_error
    assert "out of range" in status.message
    assert controller.current_page == 1
    assert controller.total_items == 0


@pytest.mark.asyncio
async def test_failed_load_leaves_state_untouched(page_source):
    """Test that a failing load(3) keeps page, items and totals."""
    controller = PageFetchController(page_source.fetch, page_size=10)
    await controller.load(1)
    before = controller.state
    cause = RuntimeError("backend unavailable")
    page_source.fail_with = cause

    status = await controller.load(3)

    assert status.kind is StatusKind.ERROR
    assert status.message == "backend unavailable"
    assert controller.error is not None
    assert controller.error.cause is cause
    assert controller.state == before
    assert controller.current_page == 1
    assert controller.total_items == 25


@pytest.mark.asyncio
async def test_error_is_cleared_by_next_operation(page_source):
    """Test that errors are not sticky."""
    controller = PageFetchController(page_source.fetch, page_size=10)
    await controller.load(1)
    page_source.fail_with = RuntimeError("boom")
    await controller.next_page()
    assert controller.status.is_error

    page_source.fail_with = None
    status = await controller.next_page()

    assert status.is_idle
    assert controller.error is None
    assert controller.current_page == 2


@pytest.mark.asyncio
async def test_fetch_failure_is_passed_through(page_source):
    """Test that a FetchFailure raised by the fetcher is stored verbatim."""
    controller = PageFetchController(page_source.fetch, page_size=10)
    failure = FetchFailure("unauthorized")
    page_source.fail_with = failure

    status = await controller.load(1)

    assert status.failure is failure


@pytest.mark.asyncio
async def test_invalid_payload_becomes_failure():
    """Test that a malformed fetcher result is reported, not raised."""

    async def fetch(page: int, page_size: int):
        return {"items": [], "totalItems": -1}

    controller = PageFetchController(fetch, page_size=10)

    status = await controller.load(1)

    assert status.is_error
    assert "PageResult" in status.message


@pytest.mark.asyncio
async def test_mapping_payload_is_accepted():
    """Test that fetchers may return plain dicts."""

    async def fetch(page: int, page_size: int):
        return {"items": ["a", "b"], "totalItems": 2}

    controller = PageFetchController(fetch, page_size=10)

    await controller.load(1)

    assert controller.items == ("a", "b")
    assert controller.total_pages == 1


@pytest.mark.asyncio
async def test_next_and_previous_respect_bounds(page_source):
    """Test that navigation past either end does not fetch."""
    controller = PageFetchController(page_source.fetch, page_size=10)
    await controller.load(1)

    await controller.previous_page()
    assert page_source.calls == [(1, 10)]

    await controller.next_page()
    await controller.next_page()
    await controller.next_page()
    assert controller.current_page == 3
    assert page_source.calls == [(1, 10), (2, 10), (3, 10)]

    await controller.previous_page()
    assert controller.current_page == 2
    assert controller.has_previous_page


@pytest.mark.asyncio
async def test_next_page_is_single_flight(page_source):
    """Test that a second next_page() during a fetch is ignored."""
    controller = PageFetchController(page_source.fetch, page_size=10)
    await controller.load(1)
    page_source.gate = asyncio.Event()

    first = asyncio.create_task(controller.next_page())
    await asyncio.sleep(0)
    assert controller.is_loading

    second = await controller.next_page()
    assert second.is_loading

    page_source.gate.set()
    await first

    assert page_source.calls == [(1, 10), (2, 10)]
    assert controller.current_page == 2
    assert controller.status.is_idle


@pytest.mark.asyncio
async def test_refresh_is_idempotent(page_source):
    """Test that two refreshes over identical data give identical state."""
    controller = PageFetchController(page_source.fetch, page_size=10)
    await controller.load(2)

    await controller.refresh()
    after_first = controller.state
    await controller.refresh()

    assert controller.state == after_first
    assert controller.current_page == 2
    assert page_source.calls == [(2, 10), (2, 10), (2, 10)]


@pytest.mark.asyncio
async def test_cancellation_restores_status(page_source):
    """Test that cancelling the awaiting task does not leave it loading."""
    controller = PageFetchController(page_source.fetch, page_size=10)
    page_source.gate = asyncio.Event()

    task = asyncio.create_task(controller.load(1))
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert controller.status.is_idle
    assert controller.total_items == 0


@pytest.mark.asyncio
async def test_page_bounds_hold_after_every_operation(page_source):
    """Test 1 <= current_page <= max(total_pages, 1) across mixed operations."""
    controller = PageFetchController(page_source.fetch, page_size=7)
    assert_page_bounds(controller)

    await controller.go_to_page(99)
    assert_page_bounds(controller)
    await controller.next_page()
    assert_page_bounds(controller)
    await controller.previous_page()
    assert_page_bounds(controller)
    await controller.load(-1)
    assert_page_bounds(controller)

    page_source.data = page_source.data[:3]
    await controller.refresh()
    assert_page_bounds(controller)
    await controller.go_to_page(controller.current_page)
    assert_page_bounds(controller)
    assert controller.current_page == 1

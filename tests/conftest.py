"""Pytest configuration and fixtures."""

import asyncio
from pathlib import Path

import pytest
import structlog

from pager.core import PageResult, StreamChunk


class FakePageSource:
    """In-memory page-indexed fetcher that records its calls."""

    def __init__(self, total_items: int = 25):
        self.data = list(range(total_items))
        self.calls: list[tuple[int, int]] = []
        self.fail_with: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def fetch(self, page: int, page_size: int) -> PageResult:
        self.calls.append((page, page_size))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        start = (page - 1) * page_size
        return PageResult(
            items=self.data[start : start + page_size], total_items=len(self.data)
        )


class FakeStreamSource:
    """In-memory cursor fetcher serving chunks of the given sizes."""

    def __init__(self, sizes: list[int]):
        self.sizes = sizes
        self.calls: list[int] = []
        # cursor -> number of times it should still fail
        self.failures: dict[int, int] = {}
        self.gate: asyncio.Event | None = None

    async def fetch(self, page: int) -> StreamChunk:
        self.calls.append(page)
        if self.gate is not None:
            await self.gate.wait()
        if self.failures.get(page):
            self.failures[page] -= 1
            raise ConnectionError(f"cursor {page} unavailable")
        size = self.sizes[page] if page < len(self.sizes) else 0
        return StreamChunk(
            items=[f"{page}:{i}" for i in range(size)],
            has_more=page < len(self.sizes) - 1,
        )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch) -> None:
    """Keep user config files and PAGER_ variables out of the tests."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.delenv("PAGER_CONFIG", raising=False)
    for var in ("PAGER_VERBOSE", "PAGER_PAGE_SIZE", "PAGER_PROXIMITY_THRESHOLD"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo configure_logging() calls made by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def page_source() -> FakePageSource:
    """Provide a 25-item page source."""
    return FakePageSource(total_items=25)


@pytest.fixture
def stream_source() -> FakeStreamSource:
    """Provide a stream source serving 20, 20 and 5 items."""
    return FakeStreamSource([20, 20, 5])

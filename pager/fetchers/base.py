"""Base protocols for data fetchers."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol

from pager.core.models import PageResult, StreamChunk

# Plain-callable forms accepted by the controllers
PageFetchFn = Callable[[int, int], Awaitable[PageResult | Mapping[str, Any]]]
StreamFetchFn = Callable[[int], Awaitable[StreamChunk | Mapping[str, Any]]]


class PageFetcher(Protocol):
    """Protocol for page-indexed fetching."""

    async def fetch_page(self, page: int, page_size: int) -> PageResult:
        """
        Fetch one page of items.

        Args:
            page: The 1-based page number
            page_size: Number of items per page

        Returns:
            The page items and the total item count

        Raises:
            Exception: If fetching fails
        """
        ...


class StreamFetcher(Protocol):
    """Protocol for incremental (cursor) fetching."""

    async def fetch_chunk(self, page: int) -> StreamChunk:
        """
        Fetch the chunk at a cursor position.

        Args:
            page: The 0-based cursor

        Returns:
            The chunk items and whether more chunks follow

        Raises:
            Exception: If fetching fails
        """
        ...

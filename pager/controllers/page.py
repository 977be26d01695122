"""Page-indexed retrieval controller."""

import asyncio
from typing import Generic, TypeVar

from structlog.typing import FilteringBoundLogger

from pager.controllers.base import FetchingController
from pager.core.errors import FetchFailure
from pager.core.models import FetchStatus, PageResult, PaginationState, count_pages
from pager.fetchers.base import PageFetchFn

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


class PageFetchController(FetchingController, Generic[T]):
    """Drive a discrete, page-numbered view over a fetcher.

    Pages are 1-based. The controller keeps the items of the current page,
    the total item count reported by the latest successful fetch and the
    derived page count. Only one fetch runs at a time; operations invoked
    while one is in flight are ignored.

    Example:
        pages = PageFetchController(api.fetch_page, page_size=20)
        await pages.load(1)
        if pages.has_next_page:
            await pages.next_page()
    """

    def __init__(
        self,
        fetch: PageFetchFn,
        page_size: int = DEFAULT_PAGE_SIZE,
        logger: FilteringBoundLogger | None = None,
    ):
        """
        Initialize page controller.

        Args:
            fetch: Async callable taking (page, page_size)
            page_size: Items per page, fixed for the controller's lifetime
            logger: Optional structlog logger

        Raises:
            ValueError: If page_size is less than 1
        """
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        super().__init__(logger)
        self._fetch_fn = fetch
        self._state: PaginationState[T] = PaginationState(page_size=page_size)

    # -------------------------
    # Read-only view
    # -------------------------
    @property
    def state(self) -> PaginationState[T]:
        return self._state

    @property
    def current_page(self) -> int:
        return self._state.current_page

    @property
    def page_size(self) -> int:
        return self._state.page_size

    @property
    def total_items(self) -> int:
        return self._state.total_items

    @property
    def total_pages(self) -> int:
        return self._state.total_pages

    @property
    def items(self) -> tuple[T, ...]:
        return self._state.items

    @property
    def has_next_page(self) -> bool:
        return self._state.has_next_page

    @property
    def has_previous_page(self) -> bool:
        return self._state.has_previous_page

    # -------------------------
    # Navigation
    # -------------------------
    async def load(self, page: int) -> FetchStatus:
        """Load a page, rejecting requests outside the known bounds.

        Rejected calls leave everything untouched and do not reach the
        fetcher. A failed fetch leaves the state as it was.

        Returns:
            The status after the call
        """
        if reason := self._rejection(page):
            self.logger.debug("load_rejected", page=page, reason=reason)
            return self._status
        return await self._load(page, clamp=False)

    async def go_to_page(self, page: int) -> FetchStatus:
        """Load a page, clamping it into [1, total_pages] instead of rejecting."""
        if self.is_loading:
            self.logger.debug("load_rejected", page=page, reason="in_flight")
            return self._status

        target = max(page, 1)
        if self.total_pages > 0:
            target = min(target, self.total_pages)
        if target != page:
            self.logger.debug("page_clamped", requested=page, page=target)
        return await self._load(target, clamp=True)

    async def next_page(self) -> FetchStatus:
        """Load the page after the current one, if there is one."""
        if self.is_loading or not self.has_next_page:
            self.logger.debug("next_page_skipped", page=self.current_page)
            return self._status
        return await self._load(self.current_page + 1, clamp=False)

    async def previous_page(self) -> FetchStatus:
        """Load the page before the current one, if there is one."""
        if self.is_loading or not self.has_previous_page:
            self.logger.debug("previous_page_skipped", page=self.current_page)
            return self._status
        return await self._load(self.current_page - 1, clamp=False)

    async def refresh(self) -> FetchStatus:
        """Reload the current page."""
        return await self.load(self.current_page)

    # -------------------------
    # Internals
    # -------------------------
    def _rejection(self, page: int) -> str | None:
        if self.is_loading:
            return "in_flight"
        if page < 1:
            return "before_first_page"
        if self.total_pages > 0 and page > self.total_pages:
            return "past_last_page"
        return None

    async def _load(self, page: int, clamp: bool) -> FetchStatus:
        prior = self._begin()
        log = self.logger.bind(page=page, page_size=self.page_size)
        log.debug("load_started")

        try:
            result = await self._fetch(
                self._fetch_fn, page, self.page_size, model=PageResult
            )
            last_page = max(count_pages(result.total_items, self.page_size), 1)
            while page > last_page and clamp:
                # Each response may report a lower last page; page strictly decreases
                log.debug("page_clamped", requested=page, page=last_page)
                page = last_page
                result = await self._fetch(
                    self._fetch_fn, page, self.page_size, model=PageResult
                )
                last_page = max(count_pages(result.total_items, self.page_size), 1)
            if page > last_page:
                raise FetchFailure(
                    f"page {page} is out of range (last page is {last_page})"
                )
        except FetchFailure as failure:
            return self._fail(failure, page=page)
        except asyncio.CancelledError:
            self._status = prior
            raise

        self._state = PaginationState(
            page_size=self.page_size,
            current_page=page,
            total_items=result.total_items,
            items=tuple(result.items),
        )
        log.debug(
            "page_committed",
            page=page,
            items=len(result.items),
            total_items=result.total_items,
            total_pages=self.total_pages,
        )
        return self._succeed()

"""Incremental (infinite scroll) retrieval controller."""

import asyncio
from typing import Generic, TypeVar

from structlog.typing import FilteringBoundLogger

from pager.controllers.base import FetchingController
from pager.core.errors import FetchFailure
from pager.core.models import FetchStatus, ResultBuffer, StreamChunk
from pager.fetchers.base import StreamFetchFn

T = TypeVar("T")

DEFAULT_PROXIMITY_THRESHOLD = 200


class StreamAppendController(FetchingController, Generic[T]):
    """Accumulate chunks from a fetcher into an append-only buffer.

    The cursor starts at 0 and advances only after a successful fetch, so a
    failed load_more() can simply be retried. Once the fetcher reports no
    further chunks the controller is exhausted and load_more() does nothing
    until reset().
    """

    def __init__(
        self,
        fetch: StreamFetchFn,
        proximity_threshold: float = DEFAULT_PROXIMITY_THRESHOLD,
        logger: FilteringBoundLogger | None = None,
    ):
        """
        Initialize stream controller.

        Args:
            fetch: Async callable taking the cursor
            proximity_threshold: Distance from the end at or below which more
                data should be loaded
            logger: Optional structlog logger

        Raises:
            ValueError: If proximity_threshold is negative
        """
        if proximity_threshold < 0:
            raise ValueError(
                f"proximity_threshold must not be negative, got {proximity_threshold}"
            )
        super().__init__(logger)
        self._fetch_fn = fetch
        self._buffer: ResultBuffer[T] = ResultBuffer()
        self._proximity_threshold = proximity_threshold
        # Bumped by reset() so fetches started before it are discarded
        self._generation = 0
        # True while any fetcher call is outstanding, stale or not
        self._in_flight = False

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._buffer.items)

    @property
    def cursor(self) -> int:
        return self._buffer.cursor

    @property
    def exhausted(self) -> bool:
        return self._buffer.exhausted

    @property
    def proximity_threshold(self) -> float:
        return self._proximity_threshold

    async def load_more(self) -> FetchStatus:
        """Fetch the chunk at the cursor and append it.

        Returns:
            The status after the call
        """
        if self.is_loading:
            self.logger.debug("load_more_skipped", reason="in_flight")
            return self._status
        if self._in_flight:
            self.logger.debug("load_more_skipped", reason="stale_in_flight")
            return self._status
        if self.exhausted:
            self.logger.debug("load_more_skipped", reason="exhausted")
            return self._status

        prior = self._begin()
        generation = self._generation
        cursor = self._buffer.cursor
        self.logger.debug("load_started", cursor=cursor)

        self._in_flight = True
        try:
            chunk = await self._fetch(self._fetch_fn, cursor, model=StreamChunk)
        except FetchFailure as failure:
            if generation != self._generation:
                self.logger.debug("stale_failure_discarded", cursor=cursor)
                return self._status
            return self._fail(failure, cursor=cursor)
        except asyncio.CancelledError:
            if generation == self._generation:
                self._status = prior
            raise
        finally:
            self._in_flight = False

        if generation != self._generation:
            self.logger.debug("stale_chunk_discarded", cursor=cursor)
            return self._status

        self._buffer.append(list(chunk.items), chunk.has_more)
        self.logger.debug(
            "chunk_appended",
            cursor=cursor,
            items=len(chunk.items),
            total=len(self._buffer.items),
        )
        if self.exhausted:
            self.logger.debug("stream_exhausted", total=len(self._buffer.items))
        return self._succeed()

    def reset(self) -> None:
        """Drop everything loaded so far, e.g. when the query changes.

        A fetch still running is discarded when it resolves; load_more()
        refuses to start until it has.
        """
        self._generation += 1
        self._buffer.clear()
        self._status = FetchStatus.idle()
        self.logger.debug("stream_reset")

    def notify_proximity(self, distance_from_end: float) -> bool:
        """Whether a view this close to the end should trigger load_more()."""
        return distance_from_end <= self._proximity_threshold

    async def load_if_near_end(self, distance_from_end: float) -> FetchStatus:
        """Call load_more() when notify_proximity() says so."""
        if not self.notify_proximity(distance_from_end):
            return self._status
        return await self.load_more()

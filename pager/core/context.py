"""Application context for dependency injection."""

from dataclasses import dataclass, field
from functools import cached_property

from structlog.typing import FilteringBoundLogger

from pager.config import Settings
from pager.controllers import PageFetchController, StreamAppendController
from pager.core.logging import configure_logging, get_logger
from pager.fetchers.base import PageFetchFn, StreamFetchFn
from pager.fetchers.http import JsonApiFetcher


@dataclass
class AppContext:
    """Application context holding shared dependencies."""

    config: Settings
    _logging_configured: bool = field(default=False, init=False)

    @cached_property
    def logger(self) -> FilteringBoundLogger:
        """Get configured structlog logger."""
        if not self._logging_configured:
            configure_logging(
                verbose=self.config.verbose, json_logs=self.config.log_json
            )
            object.__setattr__(self, "_logging_configured", True)
        return get_logger()

    def json_fetcher(self, url: str, page_size: int | None = None) -> JsonApiFetcher:
        """Build a JSON API fetcher for url from the [api] settings."""
        return JsonApiFetcher(
            url,
            api=self.config.api,
            page_size=page_size or self.config.page_size,
            logger=self.logger.bind(url=url),
        )

    def page_controller(
        self, fetch: PageFetchFn, page_size: int | None = None
    ) -> PageFetchController:
        """Create a page controller using the configured page size."""
        return PageFetchController(
            fetch,
            page_size=page_size or self.config.page_size,
            logger=self.logger,
        )

    def stream_controller(self, fetch: StreamFetchFn) -> StreamAppendController:
        """Create a stream controller using the configured proximity threshold."""
        return StreamAppendController(
            fetch,
            proximity_threshold=self.config.proximity_threshold,
            logger=self.logger,
        )

"""Status bookkeeping shared by the pagination controllers."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from structlog.typing import FilteringBoundLogger

from pager.core.errors import FetchFailure
from pager.core.logging import get_logger
from pager.core.models import FetchStatus

M = TypeVar("M", bound=BaseModel)


class FetchingController:
    """Owns a FetchStatus and enforces single-flight fetching.

    Subclasses call _begin() before awaiting the fetcher and finish with
    either _succeed() or _fail(). Failures are stored, never raised.
    """

    def __init__(self, logger: FilteringBoundLogger | None = None):
        self.logger = logger or get_logger()
        self._status = FetchStatus.idle()

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def is_loading(self) -> bool:
        return self._status.is_loading

    @property
    def error(self) -> FetchFailure | None:
        """The failure of the last fetch, if it failed."""
        return self._status.failure

    def _begin(self) -> FetchStatus:
        """Enter LOADING and return the status to restore on cancellation."""
        prior = self._status
        self._status = FetchStatus.loading()
        return prior

    def _succeed(self) -> FetchStatus:
        self._status = FetchStatus.idle()
        return self._status

    def _fail(self, failure: FetchFailure, **context: Any) -> FetchStatus:
        self.logger.warning("load_failed", error=failure.message, **context)
        self._status = FetchStatus.error(failure)
        return self._status

    async def _fetch(
        self, fn: Callable[..., Awaitable[Any]], *args: Any, model: type[M]
    ) -> M:
        """Await a fetcher and validate its result into model.

        Raises:
            FetchFailure: If the fetcher raises or returns an invalid payload
        """
        try:
            result = await fn(*args)
        except FetchFailure:
            raise
        except Exception as e:
            raise FetchFailure.from_exception(e) from e

        if isinstance(result, model):
            return result
        try:
            return model.model_validate(result)
        except ValidationError as e:
            raise FetchFailure(
                f"fetcher returned an invalid {model.__name__}", cause=e
            ) from e

"""State and payload models shared by the pagination controllers."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from pager.core.errors import FetchFailure

T = TypeVar("T")


def count_pages(total_items: int, page_size: int) -> int:
    """Number of pages needed for total_items at page_size (0 when empty)."""
    if total_items <= 0:
        return 0
    return math.ceil(total_items / page_size)


# =============================================================================
# Fetch status
# =============================================================================


class StatusKind(str, Enum):
    """Lifecycle of a controller's most recent fetch."""

    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass(frozen=True)
class FetchStatus:
    """Current fetch status of a controller.

    Only ERROR carries a failure.
    """

    kind: StatusKind
    failure: FetchFailure | None = None

    @classmethod
    def idle(cls) -> "FetchStatus":
        return cls(StatusKind.IDLE)

    @classmethod
    def loading(cls) -> "FetchStatus":
        return cls(StatusKind.LOADING)

    @classmethod
    def error(cls, failure: FetchFailure) -> "FetchStatus":
        return cls(StatusKind.ERROR, failure)

    @property
    def message(self) -> str | None:
        """Failure message for ERROR, otherwise None."""
        return self.failure.message if self.failure else None

    @property
    def is_idle(self) -> bool:
        return self.kind is StatusKind.IDLE

    @property
    def is_loading(self) -> bool:
        return self.kind is StatusKind.LOADING

    @property
    def is_error(self) -> bool:
        return self.kind is StatusKind.ERROR

    def __str__(self) -> str:
        if self.failure:
            return f"{self.kind.value}: {self.failure.message}"
        return self.kind.value


# =============================================================================
# Controller state
# =============================================================================


@dataclass(frozen=True)
class PaginationState(Generic[T]):
    """Snapshot of a discrete paginated view.

    Replaced as a whole on every commit, so total_items and total_pages are
    never observed out of step.
    """

    page_size: int
    current_page: int = 1
    total_items: int = 0
    items: tuple[T, ...] = ()

    @property
    def total_pages(self) -> int:
        return count_pages(self.total_items, self.page_size)

    @property
    def last_page(self) -> int:
        """Highest page current_page may take (1 while nothing is known)."""
        return max(self.total_pages, 1)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1


@dataclass
class ResultBuffer(Generic[T]):
    """Append-only buffer of an incremental (infinite scroll) view."""

    items: list[T] = field(default_factory=list)
    cursor: int = 0
    exhausted: bool = False

    def append(self, chunk: list[T], has_more: bool) -> None:
        """Commit a successfully fetched chunk."""
        self.items.extend(chunk)
        self.cursor += 1
        self.exhausted = not has_more

    def clear(self) -> None:
        self.items.clear()
        self.cursor = 0
        self.exhausted = False


# =============================================================================
# Fetcher payloads
# =============================================================================


class PageResult(BaseModel):
    """One page returned by a discrete-mode fetcher."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    items: list[Any] = Field(default_factory=list)
    total_items: int = Field(ge=0, alias="totalItems")


class StreamChunk(BaseModel):
    """One chunk returned by a streaming-mode fetcher."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    items: list[Any] = Field(default_factory=list)
    has_more: bool = Field(alias="hasMore")

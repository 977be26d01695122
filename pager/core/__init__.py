"""Core state models, errors and logging."""

from pager.core.errors import FetchFailure
from pager.core.logging import configure_logging, get_logger
from pager.core.models import (
    FetchStatus,
    PageResult,
    PaginationState,
    ResultBuffer,
    StatusKind,
    StreamChunk,
    count_pages,
)

__all__ = [
    "FetchFailure",
    "FetchStatus",
    "StatusKind",
    "PaginationState",
    "ResultBuffer",
    "PageResult",
    "StreamChunk",
    "count_pages",
    "configure_logging",
    "get_logger",
]

"""Pager - paginated and infinite-scroll retrieval controllers."""

__version__ = "0.1.0"

from pager.controllers import PageFetchController, StreamAppendController
from pager.core import FetchFailure, FetchStatus, PageResult, StatusKind, StreamChunk
from pager.core.context import AppContext
from pager.main import app

__all__ = [
    "app",
    "AppContext",
    "PageFetchController",
    "StreamAppendController",
    "FetchFailure",
    "FetchStatus",
    "StatusKind",
    "PageResult",
    "StreamChunk",
    "__version__",
]

"""Pagination controllers."""

from pager.controllers.page import DEFAULT_PAGE_SIZE, PageFetchController
from pager.controllers.stream import DEFAULT_PROXIMITY_THRESHOLD, StreamAppendController

__all__ = [
    "PageFetchController",
    "StreamAppendController",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_PROXIMITY_THRESHOLD",
]

"""Data fetchers consumed by the controllers."""

from pager.fetchers.base import PageFetcher, PageFetchFn, StreamFetcher, StreamFetchFn
from pager.fetchers.http import JsonApiFetcher

__all__ = [
    "PageFetcher",
    "PageFetchFn",
    "StreamFetcher",
    "StreamFetchFn",
    "JsonApiFetcher",
]

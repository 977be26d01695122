"""JSON API fetcher using requests."""

import asyncio
from typing import Any

import requests
from structlog.typing import FilteringBoundLogger

from pager.config.settings import ApiSettings
from pager.core.errors import FetchFailure
from pager.core.logging import get_logger
from pager.core.models import PageResult, StreamChunk


class JsonApiFetcher:
    """Fetch pages from a JSON HTTP endpoint.

    Implements both PageFetcher and StreamFetcher. The page number and page
    size are sent as query parameters; the response is either a JSON object
    holding the item list under a configurable key, or a bare JSON array.
    """

    def __init__(
        self,
        url: str,
        api: ApiSettings | None = None,
        page_size: int = 10,
        logger: FilteringBoundLogger | None = None,
    ):
        """
        Initialize JSON API fetcher.

        Args:
            url: Endpoint returning one page per request
            api: Request and response mapping settings
            page_size: Page size sent by fetch_chunk()
            logger: Optional structlog logger
        """
        self.url = url
        self.api = api or ApiSettings()
        self.page_size = page_size
        self.logger = logger or get_logger()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api.token:
            headers["Authorization"] = f"Bearer {self.api.token}"
        return headers

    def _get(self, page: int, page_size: int) -> Any:
        """
        Request one page and decode its JSON body.

        Raises:
            FetchFailure: If the request fails or the body is not JSON
        """
        params = {self.api.page_param: page, self.api.page_size_param: page_size}
        self.logger.debug("fetching_json", url=self.url, **params)
        try:
            resp = requests.get(
                self.url,
                params=params,
                headers=self._headers(),
                timeout=self.api.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.Timeout as e:
            self.logger.warning("request_timeout", timeout_seconds=self.api.timeout)
            raise FetchFailure("request timed out", cause=e) from e
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            self.logger.error("request_failed", status=status, error=str(e))
            if status == 401:
                raise FetchFailure("unauthorized", cause=e) from e
            raise FetchFailure(f"HTTP {status}", cause=e) from e
        except requests.JSONDecodeError as e:
            self.logger.error("invalid_json", url=self.url)
            raise FetchFailure("invalid JSON response", cause=e) from e
        except requests.RequestException as e:
            self.logger.error("request_failed", error=str(e))
            raise FetchFailure(str(e) or "request failed", cause=e) from e

        self.logger.debug("fetch_complete", url=self.url)
        return data

    def _items(self, data: Any) -> list[Any]:
        if isinstance(data, list):
            return data
        if not isinstance(data, dict):
            raise FetchFailure("unexpected JSON response")
        items = data.get(self.api.items_key, [])
        if not isinstance(items, list):
            raise FetchFailure(f"'{self.api.items_key}' is not a list")
        return items

    def _total(self, data: Any) -> int | None:
        if isinstance(data, dict) and self.api.total_key in data:
            return data[self.api.total_key]
        return None

    async def fetch_page(self, page: int, page_size: int) -> PageResult:
        """Fetch a 1-based page.

        Without a total in the response, the total is estimated from the
        items seen so far, one past them when this page came back full so
        that a following page is offered. An empty page past the first only
        vouches for one item on the page before it.
        """
        wire_page = page - 1 + self.api.first_page
        data = await asyncio.to_thread(self._get, wire_page, page_size)
        items = self._items(data)
        total = self._total(data)
        if total is None:
            if not items and page > 1:
                total = (page - 2) * page_size + 1
            else:
                total = (page - 1) * page_size + len(items)
                if len(items) >= page_size:
                    total += 1
        return PageResult(items=items, total_items=total)

    async def fetch_chunk(self, page: int) -> StreamChunk:
        """Fetch the chunk at a 0-based cursor."""
        wire_page = page + self.api.first_page
        data = await asyncio.to_thread(self._get, wire_page, self.page_size)
        items = self._items(data)

        if isinstance(data, dict) and self.api.has_more_key in data:
            has_more = bool(data[self.api.has_more_key])
        elif (total := self._total(data)) is not None:
            has_more = (page + 1) * self.page_size < total
        else:
            has_more = len(items) >= self.page_size
        return StreamChunk(items=items, has_more=has_more)

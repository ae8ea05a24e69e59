import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import Any

import pydantic
from loguru import logger

from newsfeed.api.article_api import ArticleApi
from newsfeed.exceptions import NewsfeedError, TransportError
from newsfeed.models.article import PageResponse, PageResult, TOTAL_PAGES_UNKNOWN
from newsfeed.services.page_cache import InFlightTracker, PageCache
from newsfeed.utils.result import Err, Ok, Result
from newsfeed.utils.retry import (
    DEFAULT_INITIAL_BACKOFF,
    DEFAULT_MAX_JITTER,
    DEFAULT_MAX_RETRIES,
    with_retry,
)
from newsfeed.utils.validation import validate_non_negative, validate_page_number, validate_retry_count


class ArticleRepository:
    """
    Cache-first, retrying access to paginated articles.

    The repository is the only writer of its ``PageCache`` and ``InFlightTracker``. Both are
    injected so one session owns one pair; tests build isolated instances.
    """

    def __init__(
        self,
        article_api: ArticleApi,
        cache: PageCache | None = None,
        in_flight: InFlightTracker | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_backoff: float = DEFAULT_INITIAL_BACKOFF,
        max_jitter: float = DEFAULT_MAX_JITTER,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        rng: random.Random | None = None
    ) -> None:
        """
        :param article_api: Transport used for single page fetches
        :param cache: Page cache, a fresh one by default
        :param in_flight: In-flight tracker, a fresh one by default
        :param max_retries: Default number of attempts per page
        :param initial_backoff: Default backoff floor before the first retry, in seconds
        :param max_jitter: Exclusive upper bound of per-retry jitter, in seconds
        :param sleep: Awaitable used between attempts
        :param rng: Random source for jitter
        """
        validate_retry_count(max_retries)
        validate_non_negative(initial_backoff, "initial_backoff")
        validate_non_negative(max_jitter, "max_jitter")
        self.article_api = article_api
        self.cache = cache if cache is not None else PageCache()
        self.in_flight = in_flight if in_flight is not None else InFlightTracker()
        self.max_retries = max_retries
        self.initial_backoff = initial_backoff
        self.max_jitter = max_jitter
        self._sleep = sleep
        self._rng = rng or random.Random()

    async def get_page(
        self,
        page: int,
        max_retries: int | None = None,
        initial_backoff: float | None = None
    ) -> PageResult:
        """
        Get one page of articles, from the cache when possible.

        A cache hit returns ``total_pages == TOTAL_PAGES_UNKNOWN`` and touches neither the
        network nor the in-flight set. A miss fetches with exponential backoff and jitter,
        caches the articles, and reports the transport's page count. A concurrent call for
        a page already in flight waits for that fetch and shares its outcome.

        :param page: 1-based page number
        :param max_retries: Attempts for this call, defaults to the repository setting
        :param initial_backoff: Backoff floor for this call in seconds, defaults to the repository setting
        :return: The page result
        :raises HttpError: On a non-retryable status, or the last status once attempts are exhausted
        :raises TransportError: On the last network failure once attempts are exhausted
        :raises ExhaustedRetriesError: If no attempt was made (``max_retries == 0``)
        """
        validate_page_number(page)
        max_retries = self.max_retries if max_retries is None else max_retries
        initial_backoff = self.initial_backoff if initial_backoff is None else initial_backoff
        validate_retry_count(max_retries)
        validate_non_negative(initial_backoff, "initial_backoff")

        cached = self.cache.get(page)
        if cached is not None:
            logger.debug(f'Retrieving page {page} from cache')
            return PageResult(articles=cached, page=page, total_pages=TOTAL_PAGES_UNKNOWN)

        while not self.in_flight.try_acquire(page):
            pending = self.in_flight.pending(page)
            logger.debug(f'Page {page} is already being fetched, waiting for it')
            try:
                return await asyncio.shield(pending)
            except asyncio.CancelledError:
                if not pending.cancelled():
                    raise
                # the owner was torn down before finishing; take the fetch over

        logger.debug(f'Fetching page {page} from network')
        result: PageResult | None = None
        error: Exception | None = None
        try:
            response = await with_retry(
                self._attempt,
                page,
                max_retries=max_retries,
                initial_delay=initial_backoff,
                max_jitter=self.max_jitter,
                sleep=self._sleep,
                rng=self._rng
            )
            self.cache.put(page, response.data)
            result = PageResult(articles=response.data, page=response.page, total_pages=response.total_pages)
            return result
        except Exception as e:
            error = e
            raise
        finally:
            self.in_flight.release(page, result=result, error=error)

    async def _attempt(self, page: int) -> Result[PageResponse, NewsfeedError]:
        """One transport call, with its failure reported as a value."""
        try:
            raw = await self.article_api.fetch_page(page)
        except NewsfeedError as e:
            return Err(e)

        try:
            return Ok(PageResponse.model_validate(raw))
        except pydantic.ValidationError as e:
            return Err(TransportError(f'Malformed response body for page {page}: {e}'))

    def clear(self) -> None:
        """Drop every cached page."""
        self.cache.clear()

    async def close(self) -> None:
        await self.article_api.close()

import random
import sys

from loguru import logger

from newsfeed.api.article_api import ArticleApi
from newsfeed.client import Client
from newsfeed.models.article import PageResult
from newsfeed.services.article_repository import ArticleRepository
from newsfeed.services.page_cache import InFlightTracker, PageCache
from newsfeed.services.pagination_driver import PaginationDriver
from newsfeed.utils.settings import Settings, get_settings


class NewsReader:
    """
    One reading session against the article service.

    Owns the HTTP client, the page cache and the in-flight tracker for the lifetime of the
    session and tears them down on ``close``.
    """

    def __init__(self, settings: Settings | None = None, rng: random.Random | None = None) -> None:
        self.settings = settings or get_settings()
        self._init_logger()
        self._client = Client(base_url=self.settings.base_url, timeout=self.settings.request_timeout)

        self.article_api = ArticleApi(
            self._client,
            page_size=self.settings.page_size,
            total_items=self.settings.total_items
        )
        self.cache = PageCache()
        self.in_flight = InFlightTracker()
        self.repository = ArticleRepository(
            self.article_api,
            cache=self.cache,
            in_flight=self.in_flight,
            max_retries=self.settings.max_retries,
            initial_backoff=self.settings.initial_backoff,
            max_jitter=self.settings.max_jitter,
            rng=rng
        )
        self.driver = PaginationDriver(self.repository, scroll_threshold=self.settings.scroll_threshold)

    async def close(self) -> None:
        """Dispose the pagination driver and close the underlying HTTP client."""
        self.driver.dispose()
        await self.repository.close()

    async def __aenter__(self) -> "NewsReader":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def get_page(
        self,
        page: int,
        max_retries: int | None = None,
        initial_backoff: float | None = None
    ) -> PageResult:
        """
        Get one page of articles through the session's cache.

        :param page: 1-based page number
        :param max_retries: Attempts for this call, defaults to NEWSFEED_MAX_RETRIES
        :param initial_backoff: Backoff floor in seconds, defaults to NEWSFEED_INITIAL_BACKOFF
        :return: The page result; ``total_pages`` is -1 when served from the cache
        """
        return await self.repository.get_page(page, max_retries=max_retries, initial_backoff=initial_backoff)

    def clear_cache(self) -> None:
        self.repository.clear()

    def _init_logger(self) -> None:
        """Configure logging based on NEWSFEED_DEBUG.

        If NEWSFEED_DEBUG is set to a truthy value, enables DEBUG level logging.
        Otherwise, only WARNING and above are shown.
        """
        logger.remove()
        level = "DEBUG" if self.settings.debug else "WARNING"
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ) if self.settings.debug else "<level>{message}</level>"
        logger.add(sys.stderr, level=level, format=log_format)

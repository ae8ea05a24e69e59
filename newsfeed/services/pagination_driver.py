from enum import Enum

from loguru import logger

from newsfeed.exceptions import NewsfeedError
from newsfeed.models.article import Article, TOTAL_PAGES_UNKNOWN
from newsfeed.services.article_repository import ArticleRepository

DEFAULT_SCROLL_THRESHOLD = 300.0


class LoadState(str, Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    ERROR = 'error'


class PaginationDriver:
    """
    Infinite-scroll state for an article list.

    Holds the next page to load, the last known page count and every article loaded so far.
    At most one ``get_page`` call is outstanding at a time; failures are surfaced for a manual
    ``retry`` and never retried here.
    """

    def __init__(self, repository: ArticleRepository, scroll_threshold: float = DEFAULT_SCROLL_THRESHOLD) -> None:
        self.repository = repository
        self.scroll_threshold = scroll_threshold
        self.state = LoadState.IDLE
        self.current_page = 1
        self.total_pages = 1
        self.articles: list[Article] = []
        self.error_message: str | None = None
        self.disposed = False

    @property
    def is_loading(self) -> bool:
        return self.state is LoadState.LOADING

    @property
    def has_more(self) -> bool:
        return self.current_page <= self.total_pages

    async def on_scroll(self, position: float, max_extent: float) -> bool:
        """
        Scroll listener hook.

        :param position: Current scroll offset
        :param max_extent: Largest possible scroll offset
        :return: True if a page was loaded as a result
        """
        if position >= max_extent - self.scroll_threshold:
            return await self.load_next_page()
        return False

    async def load_next_page(self) -> bool:
        """
        Load ``current_page`` if nothing is loading, no error is pending and pages remain.

        :return: True if a page was appended
        """
        if self.disposed or self.state is not LoadState.IDLE or not self.has_more:
            return False
        return await self._load()

    async def retry(self) -> bool:
        """Re-request the page that failed. Only valid in the error state."""
        if self.disposed or self.state is not LoadState.ERROR:
            return False
        return await self._load()

    async def refresh(self) -> bool:
        """Forget everything loaded and start again from the first page."""
        if self.disposed or self.is_loading:
            return False
        self.repository.clear()
        self.current_page = 1
        self.total_pages = 1
        self.articles = []
        self.error_message = None
        self.state = LoadState.IDLE
        return await self._load()

    def dispose(self) -> None:
        """Tear down; a fetch that completes afterwards leaves this driver untouched."""
        self.disposed = True

    async def _load(self) -> bool:
        page = self.current_page
        self.state = LoadState.LOADING
        self.error_message = None
        try:
            result = await self.repository.get_page(page)
        except NewsfeedError as e:
            return self._fail(page, e)
        except Exception as e:
            logger.exception(f'Unexpected error loading page {page}')
            return self._fail(page, e)
        except BaseException:
            # cancelled mid-load; leave the driver loadable again
            if self.state is LoadState.LOADING:
                self.state = LoadState.IDLE
            raise

        if self.disposed:
            logger.debug(f'Discarding page {page} after dispose')
            return False

        self.articles.extend(result.articles)
        if result.total_pages != TOTAL_PAGES_UNKNOWN:
            self.total_pages = result.total_pages
        self.current_page = page + 1
        self.state = LoadState.IDLE
        return True

    def _fail(self, page: int, error: Exception) -> bool:
        if self.disposed:
            logger.debug(f'Discarding failure for page {page} after dispose')
            return False
        logger.warning(f'Loading page {page} failed: {error}')
        self.error_message = str(error)
        self.state = LoadState.ERROR
        return False

"""Newsfeed client.

Cache-first, retrying access to a paginated article service, plus the
infinite-scroll state that consumes it.

Example usage:
    from newsfeed import NewsReader

    async with NewsReader() as reader:
        await reader.driver.load_next_page()
        for article in reader.driver.articles:
            print(article.title)
"""

from newsfeed.reader import NewsReader
from newsfeed.client import Client
from newsfeed.exceptions import (
    NewsfeedError,
    TransportError,
    HttpError,
    FormatError,
    ExhaustedRetriesError,
    ConfigurationError,
    ValidationError,
)

# Models
from newsfeed.models.article import Article, PageResponse, PageResult, TOTAL_PAGES_UNKNOWN
from newsfeed.models.user import User, decode_user, parse_user

# Services
from newsfeed.api.article_api import ArticleApi
from newsfeed.services.article_repository import ArticleRepository
from newsfeed.services.page_cache import InFlightTracker, PageCache
from newsfeed.services.pagination_driver import LoadState, PaginationDriver

__version__ = "0.1.0"

__all__ = [
    # Main entry point
    "NewsReader",
    "Client",
    # Exceptions
    "NewsfeedError",
    "TransportError",
    "HttpError",
    "FormatError",
    "ExhaustedRetriesError",
    "ConfigurationError",
    "ValidationError",
    # Models
    "Article",
    "PageResponse",
    "PageResult",
    "TOTAL_PAGES_UNKNOWN",
    "User",
    "decode_user",
    "parse_user",
    # Services
    "ArticleApi",
    "ArticleRepository",
    "InFlightTracker",
    "PageCache",
    "LoadState",
    "PaginationDriver",
]

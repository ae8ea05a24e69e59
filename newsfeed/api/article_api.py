import math
from typing import Any

from newsfeed.api.base_api import BaseApi
from newsfeed.client import Client
from newsfeed.exceptions import ConfigurationError, TransportError
from newsfeed.utils.validation import validate_page_number

DEFAULT_PAGE_SIZE = 10
DEFAULT_TOTAL_ITEMS = 100

ARTICLE_FIELDS = ('id', 'title', 'body')


class ArticleApi(BaseApi):
    """Single-attempt page fetches against the ``/posts`` endpoint."""

    def __init__(
        self,
        client: Client,
        page_size: int = DEFAULT_PAGE_SIZE,
        total_items: int = DEFAULT_TOTAL_ITEMS
    ) -> None:
        if page_size < 1:
            raise ConfigurationError(f"Page size must be at least 1, got {page_size}")
        if total_items < 0:
            raise ConfigurationError(f"Total item count cannot be negative, got {total_items}")
        super().__init__(client)
        self.page_size = page_size
        self.total_items = total_items

    @property
    def total_pages(self) -> int:
        # The service does not report its size; derive it from the configured corpus
        return math.ceil(self.total_items / self.page_size)

    async def fetch_page(self, page: int) -> dict[str, Any]:
        """
        Gets one page of articles.

        :param page: 1-based page number
        :return: ``{'page': page, 'total_pages': n, 'data': [{'id', 'title', 'body'}, ...]}``
        :raises ValidationError: If page is not a positive integer
        :raises HttpError: If the service answers with a non-2xx status
        :raises TransportError: On network failure, timeout, or a body that is not a list of objects
        """
        validate_page_number(page)

        json_response = await self._client.get(
            '/posts',
            query_params={'_start': (page - 1) * self.page_size, '_limit': self.page_size}
        )
        if not isinstance(json_response, list):
            raise TransportError(f'Malformed response body: expected a list, got {type(json_response).__name__}')

        data = []
        for item in json_response:
            if not isinstance(item, dict):
                raise TransportError(f'Malformed article entry: {item!r}')
            data.append({field: item.get(field) for field in ARTICLE_FIELDS})

        return {'page': page, 'total_pages': self.total_pages, 'data': data}

    async def close(self) -> None:
        await self._client.close()

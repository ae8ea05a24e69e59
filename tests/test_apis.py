"""Tests for API classes."""
import pytest
from unittest.mock import AsyncMock, MagicMock

from newsfeed.api.article_api import ArticleApi
from newsfeed.exceptions import ConfigurationError, HttpError, TransportError, ValidationError


class TestArticleApi:
    """Tests for the ArticleApi class."""

    @pytest.fixture
    def mock_client(self):
        """Create a mock client with async methods."""
        client = MagicMock()
        client.get = AsyncMock()
        client.close = AsyncMock()
        return client

    @pytest.fixture
    def article_api(self, mock_client):
        """Create an ArticleApi with mocked client."""
        return ArticleApi(mock_client)

    @pytest.mark.asyncio
    async def test_fetch_first_page_uses_zero_offset(self, article_api, mock_client, sample_posts):
        """Page 1 should request _start=0 with a limit of 10."""
        mock_client.get.return_value = sample_posts

        await article_api.fetch_page(1)

        mock_client.get.assert_called_once_with('/posts', query_params={'_start': 0, '_limit': 10})

    @pytest.mark.asyncio
    async def test_fetch_page_offset(self, article_api, mock_client):
        """Page n should request _start=(n-1)*10."""
        mock_client.get.return_value = []

        await article_api.fetch_page(4)

        mock_client.get.assert_called_once_with('/posts', query_params={'_start': 30, '_limit': 10})

    @pytest.mark.asyncio
    async def test_fetch_page_wraps_payload(self, article_api, mock_client, sample_posts):
        """The list body should be wrapped with page and total_pages."""
        mock_client.get.return_value = sample_posts

        result = await article_api.fetch_page(1)

        assert result['page'] == 1
        assert result['total_pages'] == 10
        assert len(result['data']) == 10
        assert result['data'][0] == {'id': 1, 'title': 'Title 1', 'body': 'Body 1'}

    @pytest.mark.asyncio
    async def test_fetch_page_total_pages_follows_corpus_size(self, mock_client):
        """total_pages should be derived from the configured corpus size."""
        mock_client.get.return_value = []
        article_api = ArticleApi(mock_client, page_size=20, total_items=45)

        result = await article_api.fetch_page(1)

        assert result['total_pages'] == 3
        mock_client.get.assert_called_once_with('/posts', query_params={'_start': 0, '_limit': 20})

    @pytest.mark.asyncio
    async def test_fetch_page_rejects_non_list_body(self, article_api, mock_client):
        """A body that is not a list is a malformed response."""
        mock_client.get.return_value = {'posts': []}

        with pytest.raises(TransportError, match='Malformed response body'):
            await article_api.fetch_page(1)

    @pytest.mark.asyncio
    async def test_fetch_page_rejects_non_object_entries(self, article_api, mock_client):
        """Entries that are not objects are malformed."""
        mock_client.get.return_value = ['oops']

        with pytest.raises(TransportError, match='Malformed article entry'):
            await article_api.fetch_page(1)

    @pytest.mark.asyncio
    async def test_fetch_page_propagates_http_error(self, article_api, mock_client):
        """HttpError from the client should pass through untouched."""
        mock_client.get.side_effect = HttpError(500, 'Failed to load articles: HTTP 500')

        with pytest.raises(HttpError) as exc_info:
            await article_api.fetch_page(1)

        assert exc_info.value.code == 500
        assert mock_client.get.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize('page', [0, -1])
    async def test_fetch_page_rejects_invalid_page(self, article_api, mock_client, page):
        """Page numbers are 1-based."""
        with pytest.raises(ValidationError):
            await article_api.fetch_page(page)

        mock_client.get.assert_not_called()

    def test_rejects_zero_page_size(self, mock_client):
        """A zero page size cannot derive a page count."""
        with pytest.raises(ConfigurationError):
            ArticleApi(mock_client, page_size=0)

    @pytest.mark.asyncio
    async def test_close_closes_client(self, article_api, mock_client):
        await article_api.close()

        mock_client.close.assert_awaited_once()

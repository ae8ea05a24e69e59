"""Shared fixtures for newsfeed tests."""
import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from newsfeed.api.article_api import ArticleApi
from newsfeed.services.article_repository import ArticleRepository


@pytest.fixture
def sample_article_data():
    return {'id': 1, 'title': 'T', 'body': 'B'}


@pytest.fixture
def sample_page_payload(sample_article_data):
    """Raw transport payload for page 1."""
    return {'page': 1, 'total_pages': 10, 'data': [sample_article_data]}


@pytest.fixture
def sample_posts():
    """Wire body for the first ten posts."""
    return [{'id': i, 'title': f'Title {i}', 'body': f'Body {i}', 'userId': 1} for i in range(1, 11)]


@pytest.fixture
def sleeps():
    """Durations passed to the recording sleep."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(seconds):
        sleeps.append(seconds)
    return _sleep


@pytest.fixture
def mock_article_api():
    """An ArticleApi whose transport call is an AsyncMock."""
    api = MagicMock(spec=ArticleApi)
    api.fetch_page = AsyncMock()
    api.close = AsyncMock()
    return api


@pytest.fixture
def repository(mock_article_api, fake_sleep):
    return ArticleRepository(mock_article_api, sleep=fake_sleep, rng=random.Random(42))

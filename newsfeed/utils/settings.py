"""
Newsfeed Configuration Settings.

Uses Pydantic Settings for type-safe configuration with environment variable support.

Optional environment variables (with defaults):
- NEWSFEED_BASE_URL: Article service base URL (default: 'https://jsonplaceholder.typicode.com')
- NEWSFEED_PAGE_SIZE: Articles per page (default: 10)
- NEWSFEED_TOTAL_ITEMS: Size of the article corpus used to derive the page count (default: 100)
- NEWSFEED_REQUEST_TIMEOUT: Per-request timeout in seconds (default: 10.0)
- NEWSFEED_MAX_RETRIES: Attempts per page fetch (default: 3)
- NEWSFEED_INITIAL_BACKOFF: Backoff before the first retry in seconds (default: 0.5)
- NEWSFEED_MAX_JITTER: Exclusive upper bound of retry jitter in seconds (default: 0.2)
- NEWSFEED_SCROLL_THRESHOLD: Distance from the list end that loads the next page (default: 300.0)
- NEWSFEED_DEBUG: Enable debug logging (default: false)
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        populate_by_name=True,
    )

    # API settings
    base_url: str = Field(default='https://jsonplaceholder.typicode.com', alias='NEWSFEED_BASE_URL')
    page_size: int = Field(default=10, alias='NEWSFEED_PAGE_SIZE')
    total_items: int = Field(default=100, alias='NEWSFEED_TOTAL_ITEMS')
    request_timeout: float = Field(default=10.0, alias='NEWSFEED_REQUEST_TIMEOUT')

    # Retry settings
    max_retries: int = Field(default=3, ge=0, alias='NEWSFEED_MAX_RETRIES')
    initial_backoff: float = Field(default=0.5, ge=0, alias='NEWSFEED_INITIAL_BACKOFF')
    max_jitter: float = Field(default=0.2, ge=0, alias='NEWSFEED_MAX_JITTER')

    # Pagination settings
    scroll_threshold: float = Field(default=300.0, ge=0, alias='NEWSFEED_SCROLL_THRESHOLD')

    # Debug settings
    debug: bool = Field(default=False, alias='NEWSFEED_DEBUG')


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

# totalPages carried by a cache hit: unknown, keep the previously known value
TOTAL_PAGES_UNKNOWN = -1


class Article(BaseModel):
    """A single article. Immutable once decoded; all three fields are required."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    id: StrictInt
    title: StrictStr
    body: StrictStr

    def __str__(self) -> str:
        return f'Article(id={self.id}, title={self.title})'


class PageResponse(BaseModel):
    """Decoded wire payload for one page: ``{page, total_pages, data}``."""
    model_config = ConfigDict(frozen=True)

    page: StrictInt
    total_pages: StrictInt
    data: tuple[Article, ...]


class PageResult(BaseModel):
    """
    What the repository hands to its callers.

    ``total_pages`` is only meaningful for a live fetch. A cache hit carries
    ``TOTAL_PAGES_UNKNOWN`` and callers must keep whatever total they already know.
    """
    model_config = ConfigDict(frozen=True)

    articles: tuple[Article, ...]
    page: int
    total_pages: int = Field(default=TOTAL_PAGES_UNKNOWN)

    @property
    def from_cache(self) -> bool:
        return self.total_pages == TOTAL_PAGES_UNKNOWN

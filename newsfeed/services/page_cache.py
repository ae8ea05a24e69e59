import asyncio
from collections.abc import Sequence

from newsfeed.models.article import Article, PageResult


class PageCache:
    """
    Session-scoped mapping of page number to the articles fetched for it.

    A page is present only after a successful fetch. Nothing is evicted; callers that want
    a bound must wrap this class.
    """

    def __init__(self) -> None:
        self._store: dict[int, tuple[Article, ...]] = {}

    def get(self, page: int) -> tuple[Article, ...] | None:
        return self._store.get(page)

    def put(self, page: int, articles: Sequence[Article]) -> None:
        self._store[page] = tuple(articles)

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, page: object) -> bool:
        return page in self._store

    def __len__(self) -> int:
        return len(self._store)


class InFlightTracker:
    """
    Pages whose fetch has started but not yet terminated.

    Each in-flight page owns a future that ``release`` resolves with the owner's outcome, so a
    second caller for the same page can await the first fetch instead of starting another.
    Check-and-set in ``try_acquire`` never awaits, which makes it atomic on the event loop.
    """

    def __init__(self) -> None:
        self._pending: dict[int, asyncio.Future[PageResult]] = {}

    def try_acquire(self, page: int) -> bool:
        """Mark ``page`` in-flight. Returns False if it already was."""
        if page in self._pending:
            return False
        self._pending[page] = asyncio.get_running_loop().create_future()
        return True

    def pending(self, page: int) -> asyncio.Future[PageResult] | None:
        """The future resolved when the in-flight fetch of ``page`` terminates."""
        return self._pending.get(page)

    def release(
        self,
        page: int,
        result: PageResult | None = None,
        error: BaseException | None = None
    ) -> None:
        """
        Remove ``page`` from the in-flight set and publish the outcome to waiters.

        Idempotent. With neither a result nor an error the waiters see a cancelled future.
        """
        future = self._pending.pop(page, None)
        if future is None or future.done():
            return
        if result is not None:
            future.set_result(result)
        elif error is not None:
            future.set_exception(error)
            # mark retrieved; waiters still receive it
            future.exception()
        else:
            future.cancel()

    def __contains__(self, page: object) -> bool:
        return page in self._pending

    @property
    def pages(self) -> frozenset[int]:
        return frozenset(self._pending)

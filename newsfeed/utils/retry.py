"""Retry utilities with exponential backoff and jitter for async operations."""
import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger

from newsfeed.exceptions import ExhaustedRetriesError, HttpError, TransportError
from newsfeed.utils.result import Ok, Result

T = TypeVar('T')

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_BACKOFF = 0.5
DEFAULT_BACKOFF_FACTOR = 2.0
DEFAULT_MAX_JITTER = 0.2

TOO_MANY_REQUESTS = 429


def is_retryable(error: BaseException) -> bool:
    """
    Decide whether a failed attempt is worth repeating.

    Transport failures and HTTP 429/5xx are transient. Any other 4xx means the server will
    never accept the request as-is. Errors outside this taxonomy are never retried.

    :param error: The error produced by the failed attempt
    :return: True if the attempt should be retried
    """
    if isinstance(error, HttpError):
        return not (400 <= error.code < 500 and error.code != TOO_MANY_REQUESTS)
    return isinstance(error, TransportError)


def compute_wait(backoff: float, rng: random.Random, max_jitter: float = DEFAULT_MAX_JITTER) -> float:
    """
    Add uniform jitter in [0, max_jitter) to a backoff floor.

    :param backoff: The backoff floor in seconds
    :param rng: Random source for the jitter
    :param max_jitter: Upper (exclusive) bound on the jitter in seconds
    :return: The number of seconds to wait
    """
    return backoff + rng.random() * max_jitter


async def with_retry(
    fn: Callable[..., Awaitable[Result[T, Exception]]],
    *args: Any,
    max_retries: int = DEFAULT_MAX_RETRIES,
    initial_delay: float = DEFAULT_INITIAL_BACKOFF,
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
    max_jitter: float = DEFAULT_MAX_JITTER,
    retryable: Callable[[BaseException], bool] = is_retryable,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    rng: random.Random | None = None,
    **kwargs: Any
) -> T:
    """
    Execute an async attempt function with retry, exponential backoff and jitter.

    ``fn`` reports its outcome as ``Ok(value)`` or ``Err(error)`` instead of raising, so the
    retry decision is a plain inspection of the returned error.

    :param fn: Async function returning an Ok/Err result
    :param args: Positional arguments to pass to fn
    :param max_retries: Total number of attempts (default 3)
    :param initial_delay: Backoff floor before the first retry, in seconds (default 0.5)
    :param backoff_factor: Multiplier applied to the floor after each retry (default 2.0)
    :param max_jitter: Exclusive upper bound of the random jitter, in seconds (default 0.2)
    :param retryable: Predicate deciding whether an error is transient
    :param sleep: Awaitable used to wait between attempts
    :param rng: Random source for the jitter
    :param kwargs: Keyword arguments to pass to fn
    :return: The value of the first successful attempt
    :raises: The last error when it is not retryable or attempts are exhausted
    :raises ExhaustedRetriesError: If no attempt ran at all
    """
    rng = rng or random.Random()
    name = getattr(fn, '__name__', repr(fn))
    backoff = initial_delay

    for attempt in range(1, max_retries + 1):
        outcome = await fn(*args, **kwargs)
        if isinstance(outcome, Ok):
            return outcome.value

        error = outcome.error
        if not retryable(error):
            logger.error(f"Non-retryable {type(error).__name__} from {name}: {error}")
            raise error
        if attempt >= max_retries:
            logger.error(f"All {max_retries} attempts failed for {name}: {error}")
            raise error

        wait = compute_wait(backoff, rng, max_jitter)
        logger.warning(
            f"Attempt {attempt}/{max_retries} for {name} failed with "
            f"{type(error).__name__}: {error}. Waiting {wait:.3f}s..."
        )
        await sleep(wait)
        backoff *= backoff_factor

    raise ExhaustedRetriesError(f"{name} did not complete after {max_retries} attempts")

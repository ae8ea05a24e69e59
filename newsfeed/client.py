import logging
from typing import Any

import httpx
from httpx import Response, Timeout
from loguru import logger

from newsfeed.exceptions import HttpError, TransportError

# Suppress verbose httpx debug logging
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

DEFAULT_BASE_URL = 'https://jsonplaceholder.typicode.com'
DEFAULT_TIMEOUT = 10.0
USER_AGENT = 'newsfeed-client/0.1.0'


def _handle_response_error(response: Response) -> None:
    """Check response status and raise HttpError for anything outside 2xx."""
    if not 200 <= response.status_code < 300:
        raise HttpError(
            response.status_code,
            f"Failed to load articles: HTTP {response.status_code}"
        )


class Client:
    """
    Thin async HTTP client for the article service.

    Issues exactly one request per call. Connection failures and timeouts become
    ``TransportError``; non-2xx statuses become ``HttpError``. No retries, no caching.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.http2_client = httpx.AsyncClient(
            http2=True,
            base_url=self.base_url,
            headers={
                'accept': 'application/json',
                'user-agent': USER_AGENT,
            },
            timeout=Timeout(timeout=timeout),
            transport=transport
        )

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.http2_client.aclose()

    async def get(self, url: str, query_params: dict[str, Any] | None = None) -> Any:
        """
        Make a GET request and decode its JSON body.

        :param url: Request URL, relative to the base URL
        :param query_params: Query parameters; None values are dropped
        :return: Decoded JSON body
        :raises TransportError: On connection/timeout errors or a non-JSON body
        :raises HttpError: On a status outside [200, 300)
        """
        if query_params:
            query_params = {k: v for k, v in query_params.items() if v is not None}

        logger.debug(f'GET request to {url}', query_params=query_params)

        try:
            response = await self.http2_client.get(url, params=query_params)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}") from e

        logger.debug(f'Response ({response.status_code}) from {url}')
        _handle_response_error(response)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f'Non-JSON response ({response.status_code}): {response.text[:200]}') from e

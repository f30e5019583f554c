"""HTTP utilities with retry and error handling."""
import asyncio
import logging
import time
from functools import wraps
from typing import Any, Awaitable, Callable, List, Optional, TypeVar, cast

import aiohttp

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Awaitable[Any]])

RETRY_STATUS_CODES = [429, 500, 502, 503, 504]


class APIError(Exception):
    """Raised when the remote server answers with a non-success status."""
    def __init__(self, message: str, status_code: Optional[int] = None, response_text: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (Status: {self.status_code})"
        return self.message


def is_retryable(error: Exception, status_codes: List[int]) -> bool:
    if isinstance(error, APIError):
        return error.status_code in status_codes
    return isinstance(error, (aiohttp.ClientError, asyncio.TimeoutError))


def async_retry(
    max_retries: int = 3,
    backoff_factor: float = 0.5,
    status_codes: Optional[List[int]] = None,
) -> Callable[[F], F]:
    """
    Retry decorator with exponential backoff for coroutines.

    Args:
        max_retries: Maximum number of retries (0 disables retrying)
        backoff_factor: Backoff multiplier (e.g., 0.5 = 0.5, 1, 2, 4, ... seconds)
        status_codes: HTTP status codes to retry on. Defaults to [429, 500, 502, 503, 504]
    """
    if status_codes is None:
        status_codes = RETRY_STATUS_CODES

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            retries = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not is_retryable(e, status_codes):
                        raise
                    retries += 1
                    if retries > max_retries:
                        if max_retries:
                            logger.error(
                                f"Max retries ({max_retries}) exceeded for {func.__name__}: {str(e)}"
                            )
                        raise

                    wait_time = backoff_factor * (2 ** (retries - 1))
                    logger.warning(
                        f"Retry {retries}/{max_retries} for {func.__name__} "
                        f"after error: {str(e)}. Waiting {wait_time:.2f} seconds..."
                    )
                    await asyncio.sleep(wait_time)

        return cast(F, wrapper)
    return decorator


async def fetch_text(url: str, timeout: float) -> str:
    """
    GET ``url`` and return the response body as text.

    Args:
        url: The URL to request
        timeout: Total time budget in seconds for connecting and reading

    Returns:
        Response body

    Raises:
        APIError: If the server answers with a non-2xx status
        aiohttp.ClientError: On connection problems
        asyncio.TimeoutError: If the request exceeds ``timeout``
    """
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    start_time = time.monotonic()
    async with aiohttp.ClientSession(timeout=client_timeout) as session:
        async with session.get(url) as response:
            body = await response.text()
            elapsed = time.monotonic() - start_time
            logger.info(f"GET {url} completed in {elapsed:.2f}s - Status: {response.status}")

            if not 200 <= response.status < 300:
                logger.debug(f"Error response body: {body[:500]}")
                raise APIError(f"Failed to fetch {url}: {response.reason}", response.status, body)
            return body

"""HTTP error handling utilities."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class HttpRequestError(Exception):
    """Request failed at the transport or HTTP status level.

    ``status_code`` is None for connection errors and timeouts. The response
    body is kept in ``body`` only, so ``message`` is safe to show to users.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


async def safe_http_request(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    **kwargs: Any,
) -> httpx.Response:
    """
    Make HTTP request with consistent error handling.

    Args:
        client: httpx.AsyncClient instance
        method: HTTP method (GET, POST, etc.)
        path: Request path or absolute URL
        **kwargs: Additional arguments for request

    Returns:
        Response object

    Raises:
        HttpRequestError: On HTTP or connection errors
    """
    try:
        response = await client.request(method, path, **kwargs)
        response.raise_for_status()
        return response
    except httpx.ConnectError as e:
        logger.error(f"Connection failed to {client.base_url}{path}: {e}")
        raise HttpRequestError(f"Connection failed: {e}") from e
    except httpx.TimeoutException as e:
        logger.error(f"Request timeout for {client.base_url}{path}: {e}")
        raise HttpRequestError(f"Request timeout: {e}") from e
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error(f"HTTP {status} error for {client.base_url}{path}")
        raise HttpRequestError(
            f"HTTP {status}",
            status_code=status,
            body=e.response.text,
        ) from e
    except httpx.HTTPError as e:
        logger.error(f"Unexpected error for {client.base_url}{path}: {e}")
        raise HttpRequestError(f"Request failed: {e}") from e

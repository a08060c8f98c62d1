"""Core utilities for async HTTP clients, concurrency, and error handling."""

from .async_context import AsyncContextManager
from .async_http_client import (
    BaseAsyncHttpClient,
    cleanup_all_clients,
    register_cleanup,
)
from .gather import Settled, gather_settled
from .http_errors import HttpRequestError, safe_http_request

__all__ = [
    "AsyncContextManager",
    "BaseAsyncHttpClient",
    "cleanup_all_clients",
    "register_cleanup",
    "Settled",
    "gather_settled",
    "HttpRequestError",
    "safe_http_request",
]

"""HTTP client for the image hub ``/search`` endpoint."""

import json
import logging
from typing import Iterable, Optional

import httpx

from core.utils.async_http_client import BaseAsyncHttpClient
from core.utils.http_errors import HttpRequestError, safe_http_request

from .errors import AggregateError
from .types import ImageSource, SearchResponse

logger = logging.getLogger(__name__)


class HubApiClient(BaseAsyncHttpClient):
    """Calls a running image hub and decodes its SearchResponse.

    Usable as the fetcher of an ImageSearchState:

        async with HubApiClient(user_id="user_123") as hub:
            state = ImageSearchState(hub.search)
            await state.search("sunset")

    Environment Variables:
        IMAGES_HUB_URL: Base URL of the hub (default: http://localhost:8000)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_id: Optional[str] = None,
        user_header: str = "X-User-Id",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            base_url_env_var="IMAGES_HUB_URL",
            transport=transport,
        )
        self._headers = {user_header: user_id} if user_id else {}

    async def search(
        self,
        query: str,
        providers: Iterable[ImageSource | str],
        page: int = 1,
        per_page: int = 20,
    ) -> SearchResponse:
        """Fetch one aggregated page from the hub.

        Raises:
            AggregateError: The hub could not be reached or answered non-2xx
        """
        client = await self._get_client()
        params = {
            "q": query.strip(),
            "providers": ",".join(ImageSource(p).value for p in providers),
            "page": str(page),
            "per_page": str(per_page),
        }
        try:
            response = await safe_http_request(
                client, "GET", "/search", params=params, headers=self._headers
            )
        except HttpRequestError as e:
            raise AggregateError(_error_message(e)) from e

        try:
            return SearchResponse.model_validate(response.json())
        except ValueError as e:
            raise AggregateError(f"Invalid search response: {e}") from e


def _error_message(error: HttpRequestError) -> str:
    """Prefer the hub's JSON ``message`` over the raw status line."""
    if error.status_code is None:
        return error.message
    try:
        body = json.loads(error.body)
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Search failed: HTTP {error.status_code}"

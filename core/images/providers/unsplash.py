"""Unsplash image provider.

API: https://unsplash.com/documentation#search-photos
Rate limit: 50 requests/hour (demo), 5000/hour (production)
License: Unsplash License (free, attribution required)
"""

import logging
from typing import Any

import httpx

from core.utils.http_errors import HttpRequestError, safe_http_request

from ..config import ImageConfig
from ..errors import ImageError, InvalidResponseError, RateLimitError
from ..normalizer import normalize_unsplash
from ..types import ImageSource, ProviderPage
from .base import BaseImageProvider

logger = logging.getLogger(__name__)

BASE_URL = "https://api.unsplash.com"


class UnsplashProvider(BaseImageProvider):
    """Unsplash image provider."""

    source = ImageSource.UNSPLASH
    display_name = "Unsplash"
    max_per_page = 30
    credential_env_var = "UNSPLASH_ACCESS_KEY"
    required_fields = ("id", "width", "height", "urls")
    normalize = staticmethod(normalize_unsplash)

    def _read_credential(self, config: ImageConfig) -> str | None:
        return config.unsplash_access_key

    async def _request(
        self, client: httpx.AsyncClient, query: str, page: int, per_page: int
    ) -> httpx.Response:
        return await safe_http_request(
            client,
            "GET",
            f"{BASE_URL}/search/photos",
            params={
                "query": query,
                "page": page,
                "per_page": per_page,
                "order_by": self._config.unsplash_order_by,
            },
            headers={
                "Authorization": f"Client-ID {self._api_key}",
                "Accept-Version": "v1",
            },
        )

    def _parse_page(self, data: dict[str, Any], per_page: int) -> ProviderPage:
        results = data.get("results")
        if not isinstance(results, list):
            raise InvalidResponseError(
                "'results' is missing or not a list", provider=self.source.value
            )
        return ProviderPage(
            items=results,
            total=int(data.get("total") or 0),
            total_pages=int(data.get("total_pages") or 0),
        )

    def _classify(self, error: HttpRequestError) -> ImageError:
        # Unsplash answers an exhausted hourly quota with 403 "Rate Limit Exceeded"
        if error.status_code == 403 and "rate limit" in error.body.lower():
            return RateLimitError(
                f"{self.display_name} rate limit exceeded", provider=self.source.value
            )
        return super()._classify(error)

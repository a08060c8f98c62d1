"""Pexels image provider.

API: https://www.pexels.com/api/documentation/
Rate limit: 200 requests/hour (free tier)
License: Pexels License (free for commercial use, no attribution required)
"""

import logging
from typing import Any

import httpx

from core.utils.http_errors import safe_http_request

from ..config import ImageConfig
from ..errors import InvalidResponseError
from ..normalizer import normalize_pexels
from ..types import ImageSource, ProviderPage, count_pages
from .base import BaseImageProvider

logger = logging.getLogger(__name__)

BASE_URL = "https://api.pexels.com/v1"


class PexelsProvider(BaseImageProvider):
    """Pexels image provider."""

    source = ImageSource.PEXELS
    display_name = "Pexels"
    max_per_page = 80
    credential_env_var = "PEXELS_API_KEY"
    required_fields = ("id", "width", "height", "src")
    normalize = staticmethod(normalize_pexels)

    def _read_credential(self, config: ImageConfig) -> str | None:
        return config.pexels_api_key

    async def _request(
        self, client: httpx.AsyncClient, query: str, page: int, per_page: int
    ) -> httpx.Response:
        return await safe_http_request(
            client,
            "GET",
            f"{BASE_URL}/search",
            params={"query": query, "page": page, "per_page": per_page},
            headers={"Authorization": self._api_key},
        )

    def _parse_page(self, data: dict[str, Any], per_page: int) -> ProviderPage:
        photos = data.get("photos")
        if not isinstance(photos, list):
            raise InvalidResponseError(
                "'photos' is missing or not a list", provider=self.source.value
            )
        total = int(data.get("total_results") or 0)
        page_size = int(data.get("per_page") or per_page)
        return ProviderPage(
            items=photos,
            total=total,
            total_pages=count_pages(total, page_size),
        )

"""Pixabay image provider.

API: https://pixabay.com/api/docs/
Rate limit: 100 requests/60 seconds
License: Pixabay Content License (free, attribution appreciated)
"""

import logging
from typing import Any

import httpx

from core.utils.http_errors import HttpRequestError, safe_http_request

from ..config import ImageConfig
from ..errors import ConfigurationError, ImageError, InvalidResponseError
from ..normalizer import normalize_pixabay
from ..types import ImageSource, ProviderPage, count_pages
from .base import BaseImageProvider

logger = logging.getLogger(__name__)


class PixabayProvider(BaseImageProvider):
    """Pixabay image provider.

    The key travels as a query parameter rather than a header. ``totalHits``
    (the number of hits reachable through the API) is reported as the total,
    not the overall ``total`` which can exceed what pagination can reach.
    """

    source = ImageSource.PIXABAY
    display_name = "Pixabay"
    max_per_page = 200
    credential_env_var = "PIXABAY_API_KEY"
    required_fields = ("id", "imageWidth", "imageHeight")
    normalize = staticmethod(normalize_pixabay)

    def _read_credential(self, config: ImageConfig) -> str | None:
        return config.pixabay_api_key

    def clamp_per_page(self, per_page: int) -> int:
        # Pixabay rejects per_page below 3
        return max(3, super().clamp_per_page(per_page))

    async def _request(
        self, client: httpx.AsyncClient, query: str, page: int, per_page: int
    ) -> httpx.Response:
        return await safe_http_request(
            client,
            "GET",
            self._config.pixabay_url,
            params={
                "key": self._api_key,
                "q": query,
                "page": page,
                "per_page": per_page,
                "image_type": "photo",
                "safesearch": "true",
            },
        )

    def _parse_page(self, data: dict[str, Any], per_page: int) -> ProviderPage:
        hits = data.get("hits")
        if not isinstance(hits, list):
            raise InvalidResponseError(
                "'hits' is missing or not a list", provider=self.source.value
            )
        total = int(data.get("totalHits") or 0)
        return ProviderPage(
            items=hits,
            total=total,
            total_pages=count_pages(total, per_page),
        )

    def _classify(self, error: HttpRequestError) -> ImageError:
        # Pixabay answers a bad key with 400 "[ERROR 400] Invalid or missing API key"
        if error.status_code == 400:
            return ConfigurationError(
                "Pixabay API key invalid or query error", provider=self.source.value
            )
        return super()._classify(error)

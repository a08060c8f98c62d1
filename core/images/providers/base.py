"""Base provider class for image sources."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar

import httpx

from core.utils.async_context import AsyncContextManager
from core.utils.http_errors import HttpRequestError

from ..config import ImageConfig
from ..errors import (
    ConfigurationError,
    ImageError,
    InvalidResponseError,
    ProviderError,
    RateLimitError,
)
from ..types import ImageResult, ImageSource, ProviderPage

logger = logging.getLogger(__name__)


class BaseImageProvider(AsyncContextManager, ABC):
    """Abstract base for image providers.

    Subclasses declare the provider's identity and limits as class
    attributes and implement ``_request`` and ``_parse_page``. The shared
    ``search`` flow clamps the page size, classifies HTTP failures and
    recovers malformed payloads as an empty page.
    """

    source: ClassVar[ImageSource]
    display_name: ClassVar[str]
    max_per_page: ClassVar[int]
    credential_env_var: ClassVar[str]
    # Native record keys required before normalization
    required_fields: ClassVar[tuple[str, ...]] = ("id",)
    normalize: ClassVar[Callable[[dict[str, Any]], ImageResult]]

    def __init__(
        self,
        config: ImageConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._api_key = self._read_credential(config)
        if not self._api_key:
            raise ConfigurationError(
                f"{self.credential_env_var} is required",
                provider=self.source.value,
            )

    @abstractmethod
    def _read_credential(self, config: ImageConfig) -> str | None:
        """Pull this provider's API key out of the config."""

    @abstractmethod
    async def _request(
        self, client: httpx.AsyncClient, query: str, page: int, per_page: int
    ) -> httpx.Response:
        """Send the provider's native search request."""

    @abstractmethod
    def _parse_page(self, data: dict[str, Any], per_page: int) -> ProviderPage:
        """Map the decoded response body into a ProviderPage.

        Raises:
            InvalidResponseError: The body does not match the provider schema
        """

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client (lazy initialization)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                transport=self._transport,
            )
        return self._client

    def clamp_per_page(self, per_page: int) -> int:
        return max(1, min(per_page, self.max_per_page))

    async def search(self, query: str, page: int = 1, per_page: int = 20) -> ProviderPage:
        """Search the provider for one page of native records.

        Args:
            query: Search term, trimmed before sending
            page: 1-indexed page number
            per_page: Requested page size, clamped to ``max_per_page``

        Returns:
            ProviderPage with raw records and pagination counts. A malformed
            body yields ``ProviderPage.empty()``.

        Raises:
            RateLimitError: Provider throttled the request
            ConfigurationError: Credential rejected
            ProviderError: Any other network or HTTP failure
        """
        per_page = self.clamp_per_page(per_page)
        client = await self._get_client()

        try:
            response = await self._request(client, query.strip(), page, per_page)
        except HttpRequestError as e:
            raise self._classify(e) from e

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"Invalid {self.display_name} API response: body is not JSON")
            return ProviderPage.empty()

        try:
            if not isinstance(data, dict):
                raise InvalidResponseError(
                    f"Expected a JSON object, got {type(data).__name__}",
                    provider=self.source.value,
                )
            result = self._parse_page(data, per_page)
        except InvalidResponseError as e:
            logger.warning(f"Invalid {self.display_name} API response: {e.message}")
            return ProviderPage.empty()

        result.items = [item for item in result.items if self._is_valid_item(item)]
        logger.debug(
            f"{self.display_name} page {page}: {len(result.items)} items "
            f"of {result.total} ({result.total_pages} pages)"
        )
        return result

    def _is_valid_item(self, item: Any) -> bool:
        if isinstance(item, dict) and all(item.get(key) for key in self.required_fields):
            return True
        logger.warning(f"Skipping malformed {self.display_name} record: {item!r:.200}")
        return False

    def _classify(self, error: HttpRequestError) -> ImageError:
        """Translate a transport/HTTP failure into the provider error taxonomy."""
        provider = self.source.value
        if error.status_code == 429:
            return RateLimitError(f"{self.display_name} rate limit exceeded", provider=provider)
        if error.status_code in (401, 403):
            return ConfigurationError(f"{self.display_name} API key invalid", provider=provider)
        return ProviderError(
            f"Failed to fetch images from {self.display_name}: {error.message}",
            provider=provider,
        )

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


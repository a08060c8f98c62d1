"""Image search service fanning one query out to several providers."""

import asyncio
import logging
from typing import Any, Iterable, Mapping, Protocol

from core.utils.async_http_client import register_cleanup
from core.utils.gather import Settled, gather_settled

from .config import ImageConfig, get_image_config
from .errors import ImageError, ValidationError
from .providers import PROVIDER_REGISTRY
from .types import (
    CANONICAL_ORDER,
    ImageResult,
    ImageSource,
    ProviderPage,
    ProviderResult,
    SearchResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 20


class SearchProvider(Protocol):
    """Capability every provider in the dispatch table implements."""

    async def search(self, query: str, page: int = 1, per_page: int = 20) -> ProviderPage: ...

    def normalize(self, record: dict[str, Any]) -> ImageResult: ...

    async def close(self) -> None: ...


def _coerce_sources(providers: Iterable[ImageSource | str]) -> set[ImageSource]:
    sources: set[ImageSource] = set()
    for provider in providers:
        try:
            sources.add(ImageSource(provider))
        except ValueError:
            raise ValidationError(f"Unknown provider: {provider!r}") from None
    return sources


class ImageSearchService:
    """Unified image search across Unsplash, Pixabay and Pexels.

    Every selected provider is queried concurrently. A provider failure never
    fails the search: it is reported in that provider's ``error`` field and in
    ``SearchResponse.errors``. Results always come back in canonical provider
    order, whatever order the responses arrive in.

    Providers can be injected (tests pass fakes); any provider not injected is
    built from PROVIDER_REGISTRY on first use and reused afterwards.

    Usage:
        service = get_image_service()
        response = await service.search("sunset", ["unsplash", "pexels"])
        for result in response.providers:
            print(result.provider, len(result.images), result.error)
    """

    def __init__(
        self,
        config: ImageConfig | None = None,
        providers: Mapping[ImageSource, SearchProvider] | None = None,
    ):
        self._config = config or get_image_config()
        self._providers: dict[ImageSource, SearchProvider] = dict(providers or {})

    def _get_provider(self, source: ImageSource) -> SearchProvider:
        """Get or create provider (lazy initialization).

        Raises:
            ConfigurationError: Provider credential is not configured
        """
        if source not in self._providers:
            provider_class = PROVIDER_REGISTRY[source]
            self._providers[source] = provider_class(self._config)
        return self._providers[source]

    def provider_status(self) -> dict[str, bool]:
        """Whether each provider has a credential configured (or was injected)."""
        configured = {
            ImageSource.UNSPLASH: self._config.unsplash_available,
            ImageSource.PIXABAY: self._config.pixabay_available,
            ImageSource.PEXELS: self._config.pexels_available,
        }
        return {
            source.value: source in self._providers or configured[source]
            for source in CANONICAL_ORDER
        }

    async def _search_provider(
        self, source: ImageSource, query: str, page: int, per_page: int
    ) -> ProviderResult:
        provider = self._get_provider(source)
        result = await provider.search(query, page=page, per_page=per_page)
        images = [provider.normalize(item) for item in result.items]
        logger.debug(f"Got {len(images)} results from {source.value} (page {page})")
        return ProviderResult(
            provider=source,
            images=images,
            total=result.total,
            total_pages=result.total_pages,
            current_page=page,
            has_more=page < result.total_pages,
        )

    def _failure_message(self, source: ImageSource, error: BaseException) -> str:
        name = source.value.capitalize()
        if isinstance(error, ImageError):
            logger.warning(f"Provider {source.value} failed: {error.message}")
            return error.message
        if isinstance(error, asyncio.TimeoutError):
            logger.warning(f"Provider {source.value} timed out")
            return f"{name} timed out after {self._config.provider_timeout:g}s"
        logger.warning(
            f"Provider {source.value} failed unexpectedly: {error!r}",
            exc_info=error,
        )
        return str(error) or f"Failed to fetch from {name}"

    def _to_result(
        self, source: ImageSource, page: int, settled: Settled[ProviderResult]
    ) -> ProviderResult:
        if settled.ok and settled.value is not None:
            return settled.value
        return ProviderResult.failed(
            source, page, self._failure_message(source, settled.error)
        )

    async def search(
        self,
        query: str,
        providers: Iterable[ImageSource | str] | None = None,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> SearchResponse:
        """Search the selected providers for one page of images each.

        Args:
            query: Search term (trimmed; must not be blank)
            providers: Providers to query, default all of them
            page: 1-indexed page number, applied to every provider
            per_page: Requested page size; each provider clamps it further

        Returns:
            SearchResponse with one ProviderResult per requested provider,
            in canonical order

        Raises:
            ValidationError: Invalid input; no provider has been called
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("Query parameter 'q' is required")
        sources = _coerce_sources(CANONICAL_ORDER if providers is None else providers)
        if not sources:
            raise ValidationError("At least one provider must be specified")
        if page < 1:
            raise ValidationError("Page must be a positive integer")
        if per_page < 1:
            raise ValidationError("per_page must be a positive integer")

        selected = [source for source in CANONICAL_ORDER if source in sources]
        logger.info(
            f"Searching {', '.join(s.value for s in selected)} for '{query}' "
            f"(page {page}, per_page {per_page})"
        )

        settled = await gather_settled(
            [self._search_provider(s, query, page, per_page) for s in selected],
            timeout=self._config.provider_timeout,
        )
        results = [
            self._to_result(source, page, outcome)
            for source, outcome in zip(selected, settled)
        ]

        response = SearchResponse.from_providers(query, results)
        if response.errors:
            logger.info(
                f"Search '{query}' degraded: {len(response.errors)}/{len(results)} "
                f"providers failed ({', '.join(response.errors)})"
            )
        return response

    async def close(self) -> None:
        """Close all provider connections."""
        for provider in self._providers.values():
            await provider.close()
        self._providers.clear()


# Module singleton
_service: ImageSearchService | None = None


def get_image_service() -> ImageSearchService:
    """Get global ImageSearchService instance."""
    global _service
    if _service is None:
        _service = ImageSearchService()
        register_cleanup("ImageSearchService", _close_image_service)
    return _service


async def _close_image_service() -> None:
    """Close the global ImageSearchService."""
    global _service
    if _service:
        await _service.close()
        _service = None


async def search_images(
    query: str,
    providers: Iterable[ImageSource | str] | None = None,
    page: int = 1,
    per_page: int = DEFAULT_PER_PAGE,
) -> SearchResponse:
    """Search images across providers using the global service."""
    return await get_image_service().search(
        query, providers=providers, page=page, per_page=per_page
    )
